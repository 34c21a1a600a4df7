"""Editor configuration with JSON settings and environment overrides.

Precedence, lowest to highest: built-in defaults, the settings file
(``~/.tabvi/settings.json``), ``TABVI_*`` environment variables, and
overrides from the command line.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from tabvi.line import TAB_WIDTH

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".tabvi"
LOG_LEVELS = ("debug", "info", "warning", "error")

# settings.json key -> EditorConfig field
_SETTINGS_KEYS: dict[str, str] = {
    "tabWidth": "tab_width",
    "logFile": "log_file",
    "logLevel": "log_level",
}

# environment variable -> EditorConfig field
_ENV_KEYS: dict[str, str] = {
    "TABVI_TAB_WIDTH": "tab_width",
    "TABVI_LOG_FILE": "log_file",
    "TABVI_LOG_LEVEL": "log_level",
}


@dataclass
class EditorConfig:
    """Resolved editor settings."""

    tab_width: int = TAB_WIDTH
    log_file: str | None = None
    log_level: str = "warning"


def default_settings_path() -> str:
    """Default settings file (~/.tabvi/settings.json)."""
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME, "settings.json")


def _load_from_file(path: str) -> tuple[dict[str, Any], Exception | None]:
    """Load settings from a JSON file. Returns (settings, error)."""
    if not os.path.exists(path):
        return {}, None
    try:
        settings = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        return {}, e
    if not isinstance(settings, dict):
        return {}, ValueError(f"expected a JSON object, got {type(settings).__name__}")
    return settings, None


def _validated(values: dict[str, Any]) -> EditorConfig:
    config = EditorConfig(**values)

    try:
        config.tab_width = int(config.tab_width)
    except (TypeError, ValueError):
        raise ValueError(f"tab width must be an integer, got {config.tab_width!r}") from None
    if config.tab_width < 1:
        raise ValueError(f"tab width must be at least 1, got {config.tab_width}")

    config.log_level = str(config.log_level).lower()
    if config.log_level not in LOG_LEVELS:
        raise ValueError(
            f"log level must be one of {', '.join(LOG_LEVELS)}, got {config.log_level!r}"
        )

    config.log_file = config.log_file or None
    return config


def load_config(
    settings_path: str | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> EditorConfig:
    """Resolve the configuration.

    A settings file that can't be read or parsed is logged and skipped.
    Invalid values raise ``ValueError``.
    """
    path = settings_path or default_settings_path()
    settings, error = _load_from_file(path)
    if error is not None:
        logger.warning("ignoring settings file %s: %s", path, error)

    values: dict[str, Any] = {}
    for key, field_name in _SETTINGS_KEYS.items():
        if settings.get(key) is not None:
            values[field_name] = settings[key]

    env = os.environ if environ is None else environ
    for var, field_name in _ENV_KEYS.items():
        if env.get(var):
            values[field_name] = env[var]

    for field_name, value in (overrides or {}).items():
        if value is not None:
            values[field_name] = value

    return _validated(values)
