"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import TextIO

from stockscan.infrastructure.barcode.source import (
    BarcodeSource,
    DeviceBarcodeSource,
    StreamBarcodeSource,
    ThreadedBarcodeSource,
)
from stockscan.infrastructure.config import get_settings
from stockscan.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().products_path)


def barcode_source(stream: TextIO, device: Path | None = None) -> BarcodeSource:
    # A terminal stream is shared with the create-product prompts, so it is
    # read on the calling thread. Only a dedicated device gets a capture thread.
    if device is None:
        _decode_leniently(stream)
        return StreamBarcodeSource(stream)
    return ThreadedBarcodeSource(DeviceBarcodeSource(device))


def _decode_leniently(stream: TextIO) -> None:
    # Only possible before the first read; otherwise the source's strict fallback applies.
    try:
        stream.reconfigure(errors="replace")
    except (AttributeError, io.UnsupportedOperation):
        pass
