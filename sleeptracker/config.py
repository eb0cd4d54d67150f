"""
Application settings — database location and logging.

Stored as JSON in config/settings.json. Missing keys fall back to
DEFAULT_CONFIG; the SLEEPTRACKER_DB environment variable overrides the
database path.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from sleeptracker.data.database import DEFAULT_DB_PATH

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "settings.json"
DB_ENV_VAR = "SLEEPTRACKER_DB"

# Default settings (used if JSON doesn't exist yet)
DEFAULT_CONFIG = {
    "db_path": None,              # None → DEFAULT_DB_PATH
    "log_level": "INFO",
    "log_file": "sleep_tracker.log",
    "console_log_level": "WARNING",
}


class Settings:
    """Loads, exposes and saves the JSON settings file."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or CONFIG_PATH
        self.config = self._load_config()

    @property
    def db_path(self) -> Path:
        env = os.environ.get(DB_ENV_VAR)
        if env:
            return Path(env)
        if self.config.get("db_path"):
            return Path(self.config["db_path"])
        return DEFAULT_DB_PATH

    @property
    def log_level(self) -> int:
        return self._level(self.config.get("log_level"), logging.INFO)

    @property
    def console_log_level(self) -> int:
        return self._level(self.config.get("console_log_level"), logging.WARNING)

    @property
    def log_file(self) -> str:
        return self.config.get("log_file") or DEFAULT_CONFIG["log_file"]

    def update(self, **values) -> None:
        unknown = set(values) - set(DEFAULT_CONFIG)
        if unknown:
            raise KeyError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        self.config.update(values)
        self.save()

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.config, f, indent=2)

    def _load_config(self) -> dict:
        cfg = DEFAULT_CONFIG.copy()
        if self.path.exists():
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError("settings root must be an object")
                cfg.update({k: v for k, v in loaded.items() if k in DEFAULT_CONFIG})
            except ValueError:
                logger.warning("Bad settings file %s, using defaults.", self.path)
        return cfg

    @staticmethod
    def _level(name: Optional[str], default: int) -> int:
        level = logging.getLevelName(str(name).upper()) if name else default
        if not isinstance(level, int):
            logger.warning("Unknown log level %r, using %s.", name,
                           logging.getLevelName(default))
            return default
        return level
