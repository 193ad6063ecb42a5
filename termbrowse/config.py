"""Read-only JSON config helpers.

Stores the UI theme, box size and log level. The browser never writes this
file; malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

from .layout import DEFAULT_UI_HEIGHT, DEFAULT_UI_WIDTH, MIN_UI_HEIGHT, MIN_UI_WIDTH
from .ui_theme import normalize_theme_name

APP_NAME = "termbrowse"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "termbrowse.log"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
DEFAULT_LOG_LEVEL = logging.WARNING


@dataclass(frozen=True)
class BrowserConfig:
    theme: str = "default"
    ui_width: int = DEFAULT_UI_WIDTH
    ui_height: int = DEFAULT_UI_HEIGHT
    log_level: int = DEFAULT_LOG_LEVEL
    no_color: bool = False


def load_config_data() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_dimension(value: object, default: int, minimum: int) -> int:
    """Accept integers at or above ``minimum``; booleans and others use ``default``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < minimum:
        return default
    return value


def _coerce_log_level(value: object) -> int:
    if not isinstance(value, str):
        return DEFAULT_LOG_LEVEL
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL


def load_config(environ: dict[str, str] | None = None) -> BrowserConfig:
    """Build the effective config from the JSON file and ``NO_COLOR``."""
    env = os.environ if environ is None else environ
    data = load_config_data()
    raw_theme = data.get("theme")
    return BrowserConfig(
        theme=normalize_theme_name(raw_theme if isinstance(raw_theme, str) else None),
        ui_width=_coerce_dimension(data.get("ui_width"), DEFAULT_UI_WIDTH, MIN_UI_WIDTH),
        ui_height=_coerce_dimension(data.get("ui_height"), DEFAULT_UI_HEIGHT, MIN_UI_HEIGHT),
        log_level=_coerce_log_level(data.get("log_level")),
        no_color=bool(env.get("NO_COLOR")) or data.get("color") is False,
    )
