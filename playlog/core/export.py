"""Write a rendered play-history log to its destination.

The whole log is rendered in memory first, then written with a single call.
A sink that accepts fewer bytes than offered is a failure; nothing is retried.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from .events import PlayEvent
from .render import render_sequence

logger = logging.getLogger(__name__)


class SinkError(OSError):
    """Raised when the rendered log cannot be written out completely."""


def _open_file(path: Path):
    # Unbuffered, so a short write surfaces as a short byte count.
    return open(path, "wb", buffering=0)


def export_events(
    events: Sequence[PlayEvent],
    path: Union[str, Path],
    opener: Optional[Callable] = None,
) -> int:
    """Render ``events`` and write them to ``path``, overwriting it.

    ``opener`` takes the path and returns a context manager whose ``write``
    reports the number of bytes accepted. Returns the number of events
    exported (time-change pairs count as two).
    """
    path = Path(path)
    opener = opener or _open_file
    buffer = render_sequence(events)

    try:
        sink = opener(path)
    except OSError as e:
        raise SinkError(f"Failed to open {path}: {e.strerror or e}") from e

    # Closing can flush, so close errors count as write errors.
    try:
        with sink:
            written = sink.write(buffer)
    except OSError as e:
        raise SinkError(f"Failed to write {path}: {e.strerror or e}") from e

    if written is None or written != len(buffer):
        raise SinkError(
            f"Failed to write all data to {path} ({written or 0} of {len(buffer)} bytes)"
        )

    logger.debug(f"Wrote {len(buffer)} bytes to {path}")
    return len(events)
