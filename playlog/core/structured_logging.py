"""Structured logging for export runs.

Wraps a standard library logger so run-level events can carry key=value
context (event counts, paths) without hand-formatting each message.
"""

from __future__ import annotations

import logging


class StructuredLogger:
    """Logger that appends structured key=value data to messages."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, msg: str, **kwargs):
        """Log debug message with structured data."""
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs):
        """Log info message with structured data."""
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs):
        """Log warning message with structured data."""
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs):
        """Log error message with structured data."""
        self._log(logging.ERROR, msg, kwargs)

    def critical(self, msg: str, **kwargs):
        """Log critical message with structured data."""
        self._log(logging.CRITICAL, msg, kwargs)

    @staticmethod
    def format_message(msg: str, extra_data: dict) -> str:
        if not extra_data:
            return msg
        structured = " ".join(f"{k}={v}" for k, v in extra_data.items())
        return f"{msg} [{structured}]"

    def _log(self, level: int, msg: str, extra_data: dict):
        self.logger.log(level, self.format_message(msg, extra_data))


def setup_logging(log_level: str = "INFO") -> StructuredLogger:
    """Configure the root logger and return the exporter's structured logger."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    return StructuredLogger("playlog")
