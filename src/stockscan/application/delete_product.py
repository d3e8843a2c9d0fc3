"""Application service: Delete Product use case."""

from __future__ import annotations

import logging

from stockscan.domain.exceptions import EntityNotFoundError
from stockscan.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        self._product_repo.delete(product_id)
        logger.info("Deleted product %s", product_id)
