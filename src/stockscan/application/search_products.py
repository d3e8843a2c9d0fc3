"""Application service: Search Products use case (query)."""

from __future__ import annotations

from stockscan.application.dto import ProductDTO, to_product_dto
from stockscan.domain.repository.product_repository import ProductRepository
from stockscan.domain.service.catalog_query import search


class SearchProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, query: str = "") -> list[ProductDTO]:
        products = search(query, self._product_repo.list_all())
        return [to_product_dto(p) for p in products]
