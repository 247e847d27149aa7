"""Utility functions for loading and saving user settings.

The settings are stored as a list of dictionaries to preserve order.
Each dictionary contains ``key``, ``value`` and ``type`` entries.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from backend import DEFAULT_REST_SECONDS

# Path to the JSON file where settings are persisted.
SETTINGS_PATH = Path(__file__).resolve().parents[1] / "data" / "settings.json"

# Default settings to initialize the file on first run.
DEFAULT_SETTINGS: List[Dict[str, Any]] = [
    {"key": "default_rest_seconds", "value": DEFAULT_REST_SECONDS, "type": "int"},
]

# Internal cache so settings are only read from disk once.
_settings_cache: List[Dict[str, Any]] | None = None


def _defaults() -> List[Dict[str, Any]]:
    return [item.copy() for item in DEFAULT_SETTINGS]


def load_settings() -> List[Dict[str, Any]]:
    """Load settings from :data:`SETTINGS_PATH` or create defaults.

    Keys missing from the file are filled in from :data:`DEFAULT_SETTINGS`.
    """
    if SETTINGS_PATH.exists():
        try:
            with SETTINGS_PATH.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError):
            logging.warning("Could not read settings from %s; using defaults", SETTINGS_PATH)
        else:
            if isinstance(data, list):
                known = {item.get("key") for item in data if isinstance(item, dict)}
                data = [item for item in data if isinstance(item, dict)]
                data.extend(item for item in _defaults() if item["key"] not in known)
                return data
            logging.warning("Ignoring malformed settings file %s", SETTINGS_PATH)
    settings = _defaults()
    save_settings(settings)
    return settings


def save_settings(settings: List[Dict[str, Any]]) -> None:
    """Persist ``settings`` to :data:`SETTINGS_PATH`."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as fh:
        json.dump(settings, fh)


def get_settings() -> List[Dict[str, Any]]:
    """Return the cached settings list, loading from disk if needed."""
    global _settings_cache
    if _settings_cache is None:
        _settings_cache = load_settings()
    return _settings_cache


def reset_cache() -> None:
    """Drop the cached settings so the next read goes to disk."""
    global _settings_cache
    _settings_cache = None


def get_value(key: str, default: Any = None) -> Any:
    """Fetch the value associated with ``key``."""
    for item in get_settings():
        if item.get("key") == key:
            return item.get("value")
    return default


def set_value(key: str, value: Any) -> None:
    """Update ``key`` with ``value`` and persist the change."""
    settings = get_settings()
    for item in settings:
        if item.get("key") == key:
            item["value"] = value
            break
    else:
        settings.append({"key": key, "value": value, "type": type(value).__name__})
    save_settings(settings)
