"""Application service: Show Product use case (query)."""

from __future__ import annotations

from stockscan.application.dto import ProductDTO, to_product_dto
from stockscan.domain.exceptions import EntityNotFoundError
from stockscan.domain.repository.product_repository import ProductRepository


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return to_product_dto(product)
