"""Play-history event model and raw record decoding.

A play-history record is 8 bytes, little-endian:

- word 0: compressed title id (``0xFFFFFFFF`` when no title applies)
- word 1: minutes since 2000-01-01 00:00 in bits 0-27, event type in bits 28-31

Decoding is best-effort: a single bad record is logged and skipped, never
fatal to the run.
"""

from __future__ import annotations

import enum
import logging
import struct
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)

RECORD_FORMAT = "<II"
RECORD_SIZE = struct.calcsize(RECORD_FORMAT)

INVALID_TITLE_ID = 0xFFFFFFFFFFFFFFFF
COMPRESSED_INVALID_TITLE_ID = 0xFFFFFFFF

_TITLE_ID_BASE = 0x0004 << 48
_MINUTES_MASK = 0x0FFFFFFF
_TYPE_SHIFT = 28


class RecordError(ValueError):
    """Raised when a raw record cannot be decoded."""


class PlayEventType(enum.IntEnum):
    APPLICATION_LAUNCH = 0
    APPLICATION_EXIT = 1
    APPLET_LAUNCH = 2
    APPLET_EXIT = 3
    JUMP_TO_APPLICATION = 4
    LEAVE_APPLICATION = 5
    JUMP_TO_APPLET = 6
    LEAVE_APPLET = 7
    SHELL_CLOSE = 8
    SHELL_OPEN = 9
    SYSTEM_SHUTDOWN = 10
    USER_TIME_CHANGE_OLD = 11
    USER_TIME_CHANGE_NEW = 12


TITLED_EVENT_TYPES = frozenset({
    PlayEventType.APPLICATION_LAUNCH,
    PlayEventType.APPLICATION_EXIT,
    PlayEventType.APPLET_LAUNCH,
    PlayEventType.APPLET_EXIT,
    PlayEventType.JUMP_TO_APPLICATION,
    PlayEventType.LEAVE_APPLICATION,
    PlayEventType.JUMP_TO_APPLET,
    PlayEventType.LEAVE_APPLET,
})

TIME_CHANGE_EVENT_TYPES = frozenset({
    PlayEventType.USER_TIME_CHANGE_OLD,
    PlayEventType.USER_TIME_CHANGE_NEW,
})


@dataclass(frozen=True)
class PlayEvent:
    """A decoded play-history event."""

    type: PlayEventType
    minutes_since_epoch: int
    title_id: int = INVALID_TITLE_ID

    @property
    def carries_title(self) -> bool:
        return self.type in TITLED_EVENT_TYPES

    @property
    def is_time_change(self) -> bool:
        return self.type in TIME_CHANGE_EVENT_TYPES


def expand_title_id(compressed: int) -> int:
    """Expand a 32-bit compressed title id into the full 64-bit title id.

    Bits 24-31 hold the low byte of the title category, bits 0-23 the unique
    id. The variation byte is not recorded and comes back as zero.
    """
    if compressed == COMPRESSED_INVALID_TITLE_ID:
        return INVALID_TITLE_ID
    category = compressed >> 24
    unique_id = compressed & 0xFFFFFF
    return _TITLE_ID_BASE | (category << 32) | (unique_id << 8)


def decode_record(chunk: bytes) -> PlayEvent:
    """Decode one raw record."""
    if len(chunk) != RECORD_SIZE:
        raise RecordError(f"Record must be {RECORD_SIZE} bytes, got {len(chunk)}")
    compressed_tid, packed = struct.unpack(RECORD_FORMAT, chunk)
    raw_type = packed >> _TYPE_SHIFT
    try:
        event_type = PlayEventType(raw_type)
    except ValueError:
        raise RecordError(f"Unknown play event type {raw_type}") from None
    return PlayEvent(
        type=event_type,
        minutes_since_epoch=packed & _MINUTES_MASK,
        title_id=expand_title_id(compressed_tid),
    )


def decode_records(buffer: bytes) -> List[PlayEvent]:
    """Decode a buffer of consecutive raw records, preserving order."""
    events: List[PlayEvent] = []
    usable = len(buffer) - len(buffer) % RECORD_SIZE
    if usable != len(buffer):
        logger.warning(
            f"Ignoring {len(buffer) - usable} trailing bytes (partial record)"
        )
    for index, offset in enumerate(range(0, usable, RECORD_SIZE)):
        try:
            events.append(decode_record(buffer[offset:offset + RECORD_SIZE]))
        except RecordError as e:
            # Skip the record; never crash the entire run.
            logger.warning(f"Skipping record {index}: {e}")
    logger.debug(f"Decoded {len(events)} play events")
    return events
