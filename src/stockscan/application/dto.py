"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from stockscan.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed in the list and detail views."""

    id: str
    name: str
    barcode: str
    amount: int
    in_stock: bool
    buy_price: str
    sell_price: str
    offer_price: str | None  # None when the product is not on offer
    specification: str
    has_image: bool
    created_at: str


def to_product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        barcode=product.barcode,
        amount=product.amount,
        in_stock=product.in_stock,
        buy_price=str(product.buy_price),
        sell_price=str(product.sell_price),
        offer_price=str(product.offer_price) if product.has_offer else None,
        specification=product.specification,
        has_image=product.has_image,
        created_at=product.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


class ScanOutcome(Enum):
    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"
    SOURCE_ERROR = "SOURCE_ERROR"


@dataclass(frozen=True)
class ScanResolution:
    """Output: what a single scan event resolved to.

    ``product`` is set only for FOUND; ``message`` only for SOURCE_ERROR.
    A NOT_FOUND resolution carries the raw barcode so the caller can offer
    to create a product pre-filled with it.
    """

    outcome: ScanOutcome
    barcode: str | None = None
    product: ProductDTO | None = None
    message: str | None = None
