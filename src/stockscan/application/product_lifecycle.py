"""Application service: create / view / edit lifecycle of a single product.

The controller holds the working copy (a ``ProductDraft``) separately from
the stored record. Cancelling drops the draft; saving validates it and
writes the whole record in one repository call.

    CREATING --save--> VIEWING --begin_edit--> EDITING
                          ^                       |
                          +-----cancel / save-----+
"""

from __future__ import annotations

import logging
from enum import Enum

from stockscan.application.create_product import CreateProductHandler
from stockscan.domain.exceptions import InvalidTransitionError
from stockscan.domain.model.product import Product, ProductDraft
from stockscan.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class LifecycleState(Enum):
    CREATING = "CREATING"
    VIEWING = "VIEWING"
    EDITING = "EDITING"


class ProductLifecycle:

    def __init__(
        self,
        product_repo: ProductRepository,
        state: LifecycleState,
        product: Product | None = None,
        draft: ProductDraft | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._state = state
        self._product = product
        self._draft = draft

    # --- Factories ------------------------------------------------------------

    @classmethod
    def for_new(cls, product_repo: ProductRepository, barcode: str = "") -> ProductLifecycle:
        """Start creating a product, pre-filled with a scanned barcode."""
        return cls(
            product_repo,
            LifecycleState.CREATING,
            draft=ProductDraft(barcode=barcode),
        )

    @classmethod
    def for_existing(cls, product_repo: ProductRepository, product: Product) -> ProductLifecycle:
        return cls(product_repo, LifecycleState.VIEWING, product=product)

    # --- Read access ----------------------------------------------------------

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def product(self) -> Product | None:
        """The committed record; None while a new product is being created."""
        return self._product

    @property
    def draft(self) -> ProductDraft | None:
        """The working copy; None while viewing."""
        return self._draft

    # --- Transitions ----------------------------------------------------------

    def begin_edit(self) -> ProductDraft:
        """VIEWING -> EDITING. Snapshot the record into a fresh working copy."""
        self._require(LifecycleState.VIEWING, "edit")
        self._draft = self._product.snapshot()
        self._state = LifecycleState.EDITING
        return self._draft

    def update(self, **changes) -> ProductDraft:
        """Replace fields of the working copy. The stored record is untouched."""
        self._require_draft("update")
        self._draft = self._draft.with_changes(**changes)
        return self._draft

    def cancel(self) -> None:
        """EDITING -> VIEWING. Discard the working copy."""
        self._require(LifecycleState.EDITING, "cancel")
        self._draft = None
        self._state = LifecycleState.VIEWING

    def save(self) -> Product:
        """Validate and commit the working copy.

        On ValidationError or PersistenceError the controller stays in its
        current state with the draft intact, and the store is unchanged.
        """
        self._require_draft("save")

        if self._state == LifecycleState.CREATING:
            product = CreateProductHandler(self._product_repo).handle(self._draft)
        else:
            product = self._product.with_draft(self._draft)
            self._product_repo.update(product)
            logger.info("Updated product %s (%s)", product.id, product.name)

        self._product = product
        self._draft = None
        self._state = LifecycleState.VIEWING
        return product

    # --- Internal helpers -----------------------------------------------------

    def _require(self, expected: LifecycleState, action: str) -> None:
        if self._state != expected:
            raise InvalidTransitionError(
                f"Cannot {action} product — current state is {self._state.value}, "
                f"expected {expected.value}"
            )

    def _require_draft(self, action: str) -> None:
        if self._state not in (LifecycleState.CREATING, LifecycleState.EDITING):
            raise InvalidTransitionError(
                f"Cannot {action} product — current state is {self._state.value}, "
                f"expected CREATING or EDITING"
            )
