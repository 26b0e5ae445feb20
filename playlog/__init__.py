"""Play-history export for handheld device event logs."""

__version__ = "0.3.0"
