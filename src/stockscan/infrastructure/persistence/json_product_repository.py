"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import base64
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from stockscan.domain.exceptions import EntityNotFoundError, PersistenceError
from stockscan.domain.model.product import Product
from stockscan.domain.model.value_objects import Money
from stockscan.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class JsonProductRepository(ProductRepository):
    """Stores the catalog as one JSON array, in insertion order.

    Every write replaces the file through a temporary sibling and
    ``os.replace``, so a failed write leaves the previous catalog intact.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._load_raw():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def insert(self, product: Product) -> None:
        records = self._load_raw()
        if any(raw["id"] == product.id for raw in records):
            raise PersistenceError(f"Product with ID '{product.id}' already exists")
        records.append(self._to_raw(product))
        self._persist_raw(records)

    def update(self, product: Product) -> None:
        records = self._load_raw()
        for i, raw in enumerate(records):
            if raw["id"] == product.id:
                records[i] = self._to_raw(product)
                break
        else:
            raise EntityNotFoundError(f"Product with ID '{product.id}' not found")
        self._persist_raw(records)

    def delete(self, product_id: str) -> None:
        records = self._load_raw()
        remaining = [raw for raw in records if raw["id"] != product_id]
        if len(remaining) == len(records):
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        self._persist_raw(remaining)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "barcode": product.barcode,
            "amount": product.amount,
            "buy_price": str(product.buy_price.amount),
            "sell_price": str(product.sell_price.amount),
            "offer_price": str(product.offer_price.amount),
            "specification": product.specification,
            "image": (
                base64.b64encode(product.image).decode("ascii")
                if product.image is not None
                else None
            ),
            "created_at": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        image = raw.get("image")
        return Product(
            id=raw["id"],
            name=raw["name"],
            barcode=raw.get("barcode", ""),
            amount=raw.get("amount", 0),
            buy_price=Money(Decimal(raw["buy_price"])),
            sell_price=Money(Decimal(raw["sell_price"])),
            offer_price=Money(Decimal(raw.get("offer_price", "0"))),
            specification=raw.get("specification", ""),
            image=base64.b64decode(image) if image is not None else None,
            created_at=_parse_timestamp(raw["created_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Could not read %s: %s", self._file_path, exc)
            raise PersistenceError(
                f"Catalog file {self._file_path} is unreadable: {exc}"
            ) from exc
        if not isinstance(records, list):
            raise PersistenceError(
                f"Catalog file {self._file_path} does not hold a product list"
            )
        return records

    def _persist_raw(self, records: list[dict]) -> None:
        payload = json.dumps(records, indent=2) + "\n"
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=".products-", suffix=".tmp"
            )
            try:
                fh = os.fdopen(fd, "w", encoding="utf-8")
            except Exception:
                os.close(fd)
                raise
            with fh:
                fh.write(payload)
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            logger.error("Could not write %s: %s", self._file_path, exc)
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Failed to save product: {exc}") from exc

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(
                f"Cannot create catalog file {self._file_path}: {exc}"
            ) from exc


def _parse_timestamp(value: str) -> datetime:
    # Hand-edited files may carry naive timestamps; those are taken as UTC.
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
