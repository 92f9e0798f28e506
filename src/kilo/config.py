"""Configuration for the editor. Defaults can be overridden from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TAB_STOP = 8
DEFAULT_QUIT_TIMES = 3
DEFAULT_MESSAGE_TIMEOUT = 5.0

LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class EditorConfig:
    """Editor configuration."""

    tab_stop: int = DEFAULT_TAB_STOP
    quit_times: int = DEFAULT_QUIT_TIMES
    message_timeout: float = DEFAULT_MESSAGE_TIMEOUT
    log_file: str | None = None
    log_level: str = "warning"

    @classmethod
    def from_env(cls) -> EditorConfig:
        """Build a config from ``KILO_*`` environment variables.

        Values that fail to parse (or are out of range) keep their default.
        """
        config = cls()
        config.tab_stop = _env_int("KILO_TAB_STOP", config.tab_stop, minimum=1)
        config.quit_times = _env_int("KILO_QUIT_TIMES", config.quit_times, minimum=0)
        config.message_timeout = _env_float(
            "KILO_MESSAGE_TIMEOUT", config.message_timeout
        )
        config.log_file = os.environ.get("KILO_LOG_FILE") or None
        level = os.environ.get("KILO_LOG_LEVEL", "").lower()
        if level in LOG_LEVELS:
            config.log_level = level
        return config


def _env_int(name: str, default: int, *, minimum: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value < minimum:
        logger.warning("Ignoring %s=%r: must be >= %d", name, raw, minimum)
        return default
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return default
    if value < 0:
        return default
    return value
