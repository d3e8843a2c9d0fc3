"""Events emitted by a barcode source."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScanEvent:
    """One decoded barcode, or the reason the scanner could not produce one.

    Exactly one of ``barcode`` and ``error`` is set. The barcode is an
    opaque string: its symbology is not known or checked here.
    """

    barcode: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.barcode is None) == (self.error is None):
            raise ValueError("ScanEvent needs exactly one of barcode or error")

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @staticmethod
    def decoded(barcode: str) -> ScanEvent:
        return ScanEvent(barcode=barcode)

    @staticmethod
    def failed(reason: str) -> ScanEvent:
        return ScanEvent(error=reason)
