"""Barcode sources — where decoded barcode strings come from.

Decoding happens upstream (a hand-held scanner in keyboard mode, a camera
app, a pipe). A source only turns that upstream output into ScanEvents.
Availability problems are reported as error events, never raised.
"""

from __future__ import annotations

import logging
import queue
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from stockscan.domain.model.scan_event import ScanEvent

logger = logging.getLogger(__name__)

# Informational only; codes are passed through without checking.
SUPPORTED_SYMBOLOGIES = ("EAN-8", "EAN-13", "UPC-E", "Code 39", "Code 128", "QR", "PDF417")

# Substituted for bytes that are not valid UTF-8.
UNREADABLE = "\ufffd"


class BarcodeSource(ABC):

    @abstractmethod
    def events(self) -> Iterator[ScanEvent]:
        """Yield scan events until the source is exhausted."""


class StreamBarcodeSource(BarcodeSource):
    """One decoded barcode per line of a text stream. Blank lines are skipped.

    Streams should be opened with ``errors="replace"``: a line carrying the
    replacement character is reported as unreadable instead of as a code.
    On a strict stream, undecodable input ends the source with an error event.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def events(self) -> Iterator[ScanEvent]:
        try:
            for line in self._stream:
                code = line.rstrip("\r\n")
                if not code.strip():
                    continue
                if UNREADABLE in code:
                    logger.warning("Discarding undecodable scanner input")
                    yield ScanEvent.failed("Unreadable scanner input")
                    continue
                yield ScanEvent.decoded(code)
        except UnicodeDecodeError as exc:
            logger.warning("Scanner input is not valid text: %s", exc)
            yield ScanEvent.failed("Unreadable scanner input")


class DeviceBarcodeSource(BarcodeSource):
    """Reads from a scanner device node or file.

    If the device cannot be opened (missing, no permission) a single
    error event is produced and the source ends.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def events(self) -> Iterator[ScanEvent]:
        try:
            stream = open(self._path, encoding="utf-8", errors="replace")
        except PermissionError:
            logger.warning("No permission to read scanner at %s", self._path)
            yield ScanEvent.failed(f"Scanner access denied: {self._path}")
            return
        except OSError as exc:
            logger.warning("Scanner at %s is unavailable: %s", self._path, exc)
            yield ScanEvent.failed(f"Scanner unavailable: {self._path}")
            return

        with stream:
            yield from StreamBarcodeSource(stream).events()


_DONE = object()


class ThreadedBarcodeSource(BarcodeSource):
    """Captures on a background thread, delivers on the consuming thread.

    Events cross over through a queue in arrival order, so the catalog is
    only ever queried and written from the thread iterating ``events()``.
    """

    def __init__(self, inner: BarcodeSource) -> None:
        self._inner = inner
        self._queue: queue.Queue = queue.Queue()

    def events(self) -> Iterator[ScanEvent]:
        worker = threading.Thread(target=self._capture, name="barcode-capture", daemon=True)
        worker.start()
        while True:
            item = self._queue.get()
            if item is _DONE:
                break
            yield item
        worker.join()

    def _capture(self) -> None:
        try:
            for event in self._inner.events():
                self._queue.put(event)
        except (OSError, ValueError) as exc:
            logger.warning("Barcode capture stopped: %s", exc)
            self._queue.put(ScanEvent.failed(f"Scanner stopped: {exc}"))
        finally:
            self._queue.put(_DONE)
