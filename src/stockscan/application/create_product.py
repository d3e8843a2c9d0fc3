"""Application service: Create Product use case."""

from __future__ import annotations

import logging

from stockscan.domain.model.product import Product, ProductDraft
from stockscan.domain.repository.product_repository import ProductRepository
from stockscan.domain.service.catalog_query import exact_match

logger = logging.getLogger(__name__)


class CreateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, draft: ProductDraft) -> Product:
        """Validate the draft and add it to the catalog as a new product.

        Raises ValidationError (nothing is written) or PersistenceError
        (the store rejected the insert; nothing is written either).
        """
        product = Product.create(draft)

        # Barcodes are not unique; the earliest product keeps winning lookups.
        if draft.barcode and exact_match(draft.barcode, self._product_repo.list_all()):
            logger.warning(
                "Barcode %s is already used by another product", draft.barcode
            )

        self._product_repo.insert(product)
        logger.info("Created product %s (%s)", product.id, product.name)
        return product
