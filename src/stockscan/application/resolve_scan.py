"""Application service: Resolve Scan use case.

Maps one decoded barcode to a catalog entry with a single exact pass.
A miss is a normal outcome, not an error: the caller decides whether to
create a product for the barcode or scan again. Nothing is written here.
"""

from __future__ import annotations

import logging

from stockscan.application.dto import ScanOutcome, ScanResolution, to_product_dto
from stockscan.domain.model.scan_event import ScanEvent
from stockscan.domain.repository.product_repository import ProductRepository
from stockscan.domain.service.catalog_query import exact_match

logger = logging.getLogger(__name__)


class ResolveScanHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, event: ScanEvent) -> ScanResolution:
        if event.is_error:
            logger.warning("Scanner reported an error: %s", event.error)
            return ScanResolution(outcome=ScanOutcome.SOURCE_ERROR, message=event.error)

        barcode = event.barcode
        product = exact_match(barcode, self._product_repo.list_all())
        if product is None:
            logger.info("No product for barcode %s", barcode)
            return ScanResolution(outcome=ScanOutcome.NOT_FOUND, barcode=barcode)

        logger.debug("Barcode %s resolved to product %s", barcode, product.id)
        return ScanResolution(
            outcome=ScanOutcome.FOUND,
            barcode=barcode,
            product=to_product_dto(product),
        )
