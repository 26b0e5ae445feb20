import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager for the play-history exporter."""

    DEFAULT_CONFIG = {
        # Destination of the rendered log; overwritten on every run.
        "output_path": "play_events.log",
        # Play-history dump to read when --dump is not given.
        "dump_path": None,
        "enable_logging": True,
        "log_level": "INFO",
    }

    def __init__(self, config_file: Path = None):
        self.config_file = config_file or Path.home() / ".playlog" / "config.json"
        self._config = dict(self.DEFAULT_CONFIG)
        self.load()

    def load(self):
        """Load configuration from file."""
        if not self.config_file.exists():
            return
        try:
            with open(self.config_file, "r") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable config {self.config_file}: {e}")
            return
        if not isinstance(loaded, dict):
            logger.warning(f"Ignoring config {self.config_file}: expected a JSON object")
            return
        self._config.update(loaded)

    def save(self):
        """Save configuration to file."""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self._config, f, indent=2)

    def get(self, key: str, default=None):
        """Get configuration value."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set configuration value."""
        self._config[key] = value

    def __getitem__(self, key: str):
        return self._config[key]

    def __setitem__(self, key: str, value: Any):
        self._config[key] = value
