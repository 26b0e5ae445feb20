"""Play-history sources.

A ``PlayHistoryService`` hands out raw play-history records the way the
device's play-history service does: query the ring start index and the
number of records, then bulk-read them. ``DumpFileService`` serves a dump
of that ring taken off the device.

Dump layout: an 8-byte header ``<ii`` (start index, total size) followed by
the ring of 8-byte records.
"""

from __future__ import annotations

import logging
import struct
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from .events import RECORD_SIZE, PlayEvent, decode_records

logger = logging.getLogger(__name__)

HEADER_FORMAT = "<ii"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)


class RetrievalError(Exception):
    """Raised when the service fails to provide play-history records."""

    def __init__(self, stage: str, detail: str):
        super().__init__(f"{stage} failure: {detail}")
        self.stage = stage
        self.detail = detail


class ConsistencyFault(RuntimeError):
    """Raised for values the service can never legitimately report."""


class PlayHistoryService(ABC):
    """Base class for play-history sources."""

    @abstractmethod
    def open(self) -> None:
        """Acquire the service."""

    @abstractmethod
    def close(self) -> None:
        """Release the service."""

    @abstractmethod
    def get_start_index(self) -> int:
        """Index of the oldest record in the ring."""

    @abstractmethod
    def get_size(self) -> int:
        """Number of records currently held."""

    @abstractmethod
    def get_history(self, start: int, count: int) -> bytes:
        """Read ``count`` raw records beginning at ``start``."""

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class DumpFileService(PlayHistoryService):
    """Serve play history from a dump file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: Optional[bytes] = None

    def open(self) -> None:
        try:
            self._data = self.path.read_bytes()
        except OSError as e:
            raise RetrievalError("init", f"cannot read {self.path}: {e.strerror or e}") from e

    def close(self) -> None:
        self._data = None

    def _header(self, stage: str):
        if self._data is None:
            raise RetrievalError(stage, "service not open")
        if len(self._data) < HEADER_SIZE:
            raise RetrievalError(stage, f"truncated header ({len(self._data)} bytes)")
        return struct.unpack_from(HEADER_FORMAT, self._data, 0)

    @property
    def capacity(self) -> int:
        if self._data is None:
            return 0
        return max(0, len(self._data) - HEADER_SIZE) // RECORD_SIZE

    def get_start_index(self) -> int:
        start, _ = self._header("start index")
        return start

    def get_size(self) -> int:
        _, size = self._header("size")
        return size

    def get_history(self, start: int, count: int) -> bytes:
        self._header("history")
        if count == 0:
            return b""
        capacity = self.capacity
        if count > capacity:
            raise RetrievalError(
                "history", f"{count} records requested, ring holds {capacity}"
            )

        ring = self._data[HEADER_SIZE:HEADER_SIZE + capacity * RECORD_SIZE]
        first = start % capacity
        # Oldest record first, wrapping around the end of the ring.
        ordered = ring[first * RECORD_SIZE:] + ring[:first * RECORD_SIZE]
        return ordered[:count * RECORD_SIZE]


def fetch_raw_events(service: PlayHistoryService) -> bytes:
    """Fetch raw records, degrading to no records on any retrieval failure.

    A negative size is not a retrieval failure: it raises ``ConsistencyFault``.
    """
    try:
        with service:
            start = service.get_start_index()
            size = service.get_size()
            if size < 0:
                raise ConsistencyFault(f"Play history reported negative size {size}")
            logger.debug(f"Play history start={start} size={size}")
            return service.get_history(start, size)
    except RetrievalError as e:
        logger.error(str(e))
        return b""


def get_play_events(service: PlayHistoryService) -> List[PlayEvent]:
    return decode_records(fetch_raw_events(service))
