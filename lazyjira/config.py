"""User JSON config and per-user directory helpers.

Reads the description highlight style and notification duration.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir, user_log_dir

APP_NAME = "lazyjira"
CONFIG_FILENAME = "config.json"
ISSUES_FILENAME = "issues.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def default_issues_path() -> Path:
    return Path(user_data_dir(APP_NAME, appauthor=False)) / ISSUES_FILENAME


def log_directory() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False))


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_style_name() -> str | None:
    """Load persisted Pygments style name, returning ``None`` when unset/invalid."""
    value = load_config().get("style")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_notification_seconds() -> float | None:
    """Load a positive notification duration override.

    Booleans, non-numbers and non-positive values are treated as unset.
    """
    value = load_config().get("notification_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0:
        return None
    return float(value)
