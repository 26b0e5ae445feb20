"""Timestamp and title id formatting for rendered log lines."""

from __future__ import annotations

from datetime import datetime, timedelta

from .events import INVALID_TITLE_ID

EPOCH = datetime(2000, 1, 1)

MINUTES_PER_DAY = 24 * 60
# The Gregorian calendar repeats exactly every 400 years.
DAYS_PER_400_YEARS = 146097


def format_timestamp(minutes_since_epoch: int) -> str:
    """Format minutes since 2000-01-01 00:00 as ``YYYY-MM-DD HH:MM``.

    The day count is reduced modulo the 400-year cycle before touching
    ``datetime``, so any non-negative value formats without overflow.
    """
    if minutes_since_epoch < 0:
        raise ValueError(f"Minute count must be non-negative, got {minutes_since_epoch}")
    days, minute_of_day = divmod(minutes_since_epoch, MINUTES_PER_DAY)
    cycles, days = divmod(days, DAYS_PER_400_YEARS)
    date = EPOCH + timedelta(days=days)
    hour, minute = divmod(minute_of_day, 60)
    year = date.year + 400 * cycles
    return f"{year:04d}-{date.month:02d}-{date.day:02d} {hour:02d}:{minute:02d}"


def format_title(title_id: int) -> str:
    if title_id == INVALID_TITLE_ID:
        return "(invalid TitleId)"
    return f"({title_id:016X})"
