"""Render decoded play events as text log lines.

Each event becomes one newline-terminated line. User time changes are
recorded by the device as two events (old time, then new time); an adjacent
pair is merged into a single line, and an unpaired half is still reported.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator

from .events import INVALID_TITLE_ID, PlayEvent, PlayEventType
from .formatting import format_timestamp, format_title

DESCRIPTIONS: Dict[PlayEventType, str] = {
    PlayEventType.APPLICATION_LAUNCH: "Application launch",
    PlayEventType.APPLICATION_EXIT: "Application exit",
    PlayEventType.APPLET_LAUNCH: "Applet launch",
    PlayEventType.APPLET_EXIT: "Applet exit",
    PlayEventType.JUMP_TO_APPLICATION: "Jump to application",
    PlayEventType.LEAVE_APPLICATION: "Leave application",
    PlayEventType.JUMP_TO_APPLET: "Jump to applet",
    PlayEventType.LEAVE_APPLET: "Leave applet",
    PlayEventType.SHELL_CLOSE: "Shell close",
    PlayEventType.SHELL_OPEN: "Shell open",
    PlayEventType.SYSTEM_SHUTDOWN: "System shutdown",
}

# DSi titles are recorded without a title id.
DSI_DESCRIPTIONS: Dict[PlayEventType, str] = {
    PlayEventType.APPLICATION_LAUNCH: "DSi application start",
    PlayEventType.APPLICATION_EXIT: "DSi application exit",
}


def render_standard(event: PlayEvent) -> str:
    """Render any event other than a user time change."""
    if event.is_time_change:
        raise ValueError(f"{event.type.name} must be rendered through iter_lines")

    timestamp = format_timestamp(event.minutes_since_epoch)
    if event.type in DSI_DESCRIPTIONS and event.title_id == INVALID_TITLE_ID:
        return f"{timestamp}: {DSI_DESCRIPTIONS[event.type]}\n"

    description = DESCRIPTIONS[event.type]
    if event.carries_title:
        return f"{timestamp}: {description} {format_title(event.title_id)}\n"
    return f"{timestamp}: {description}\n"


def render_time_change(old: PlayEvent, new: PlayEvent) -> str:
    old_ts = format_timestamp(old.minutes_since_epoch)
    new_ts = format_timestamp(new.minutes_since_epoch)
    return f"{new_ts}: User time change from {old_ts} to {new_ts}\n"


def render_orphan_old(old: PlayEvent) -> str:
    ts = format_timestamp(old.minutes_since_epoch)
    return f"{ts}: User time change (old={ts}, new time missing)\n"


def render_orphan_new(new: PlayEvent) -> str:
    ts = format_timestamp(new.minutes_since_epoch)
    return f"{ts}: User time change (new={ts}, old time missing)\n"


def iter_lines(events: Iterable[PlayEvent]) -> Iterator[str]:
    """Yield rendered lines, merging adjacent old/new time change pairs.

    Walks the input once with a two-event window. Pairing is positional
    only: an old-time event merges with the event right after it or with
    nothing.
    """
    it = iter(events)
    lookahead = next(it, None)
    while lookahead is not None:
        current, lookahead = lookahead, next(it, None)

        if current.type is PlayEventType.USER_TIME_CHANGE_OLD:
            if lookahead is not None and lookahead.type is PlayEventType.USER_TIME_CHANGE_NEW:
                yield render_time_change(current, lookahead)
                lookahead = next(it, None)
            else:
                yield render_orphan_old(current)
        elif current.type is PlayEventType.USER_TIME_CHANGE_NEW:
            yield render_orphan_new(current)
        else:
            yield render_standard(current)


def render_sequence(events: Iterable[PlayEvent]) -> bytes:
    """Render all events into a single UTF-8 buffer."""
    return "".join(iter_lines(events)).encode("utf-8")
