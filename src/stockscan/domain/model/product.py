"""Product aggregate and its editable working copy.

A Product is the only entity in the catalog. Its identity (``id``) and
``created_at`` are fixed at construction; everything else can be replaced
through a ``ProductDraft``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone

from stockscan.domain.exceptions import ValidationError
from stockscan.domain.model.value_objects import Money


@dataclass(frozen=True)
class ProductDraft:
    """Immutable snapshot of every editable product field.

    Used as the working copy while creating or editing. A draft never
    aliases the stored record: changes produce a new draft via
    ``with_changes`` and are only copied back on save.
    """

    name: str = ""
    barcode: str = ""
    image: bytes | None = None
    amount: int = 0
    buy_price: Money = field(default_factory=Money.zero)
    sell_price: Money = field(default_factory=Money.zero)
    offer_price: Money = field(default_factory=Money.zero)
    specification: str = ""

    def with_changes(self, **changes) -> ProductDraft:
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ValidationError(
                f"Unknown product field(s): {', '.join(sorted(unknown))}"
            )
        return replace(self, **changes)

    def validate(self) -> None:
        """Check the save rules in fixed order; report only the first failure."""
        if not self.name:
            raise ValidationError("Product name is required")
        if not self.buy_price.is_positive:
            raise ValidationError("Buy price must be greater than 0")
        if not self.sell_price.is_positive:
            raise ValidationError("Sell price must be greater than 0")


@dataclass
class Product:
    """A product in the catalog.

    Use ``Product.create()`` for new products — it validates the draft
    and assigns a fresh id and timestamp. The ``__init__`` stays plain
    so the repository can reconstitute persisted records as they are.
    """

    id: str
    name: str
    barcode: str
    buy_price: Money
    sell_price: Money
    offer_price: Money = field(default_factory=Money.zero)
    amount: int = 0
    specification: str = ""
    image: bytes | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(draft: ProductDraft) -> Product:
        draft.validate()
        return Product(
            id=str(uuid.uuid4()),
            name=draft.name,
            barcode=draft.barcode,
            buy_price=draft.buy_price,
            sell_price=draft.sell_price,
            offer_price=draft.offer_price,
            amount=draft.amount,
            specification=draft.specification,
            image=draft.image,
        )

    # --- Working copy ---------------------------------------------------------

    def snapshot(self) -> ProductDraft:
        return ProductDraft(
            name=self.name,
            barcode=self.barcode,
            image=self.image,
            amount=self.amount,
            buy_price=self.buy_price,
            sell_price=self.sell_price,
            offer_price=self.offer_price,
            specification=self.specification,
        )

    def with_draft(self, draft: ProductDraft) -> Product:
        """Return a copy carrying every draft field; ``id``/``created_at`` are kept."""
        draft.validate()
        return replace(
            self,
            name=draft.name,
            barcode=draft.barcode,
            image=draft.image,
            amount=draft.amount,
            buy_price=draft.buy_price,
            sell_price=draft.sell_price,
            offer_price=draft.offer_price,
            specification=draft.specification,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def has_offer(self) -> bool:
        """An offer price of zero means the product is not on offer."""
        return self.offer_price.is_positive

    @property
    def in_stock(self) -> bool:
        return self.amount > 0

    @property
    def has_image(self) -> bool:
        return self.image is not None
