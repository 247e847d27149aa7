"""Shared constants for backend modules."""

from __future__ import annotations

from pathlib import Path

# Rest owed after a set when the prescription does not specify one
DEFAULT_REST_SECONDS = 60

# Interval between rest countdown ticks in seconds
REST_TICK_INTERVAL = 1.0

# Path to the training plan catalog shipped with the application
DEFAULT_CATALOG_PATH = (
    Path(__file__).resolve().parent.parent / "data" / "training_plans.json"
)

__all__ = [
    "DEFAULT_REST_SECONDS",
    "REST_TICK_INTERVAL",
    "DEFAULT_CATALOG_PATH",
]
