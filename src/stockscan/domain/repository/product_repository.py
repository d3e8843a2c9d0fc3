"""Abstract repository for the Product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockscan.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in insertion order."""

    @abstractmethod
    def insert(self, product: Product) -> None:
        """Add a new product. Raises PersistenceError on failure."""

    @abstractmethod
    def update(self, product: Product) -> None:
        """Replace the stored record with the same ID.

        Raises EntityNotFoundError if it does not exist and
        PersistenceError if the write fails.
        """

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product. Raises EntityNotFoundError or PersistenceError."""
