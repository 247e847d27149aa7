"""Convenience imports for FitRecord.

Screens import from here so they do not need to know which backend module
owns a given helper.
"""

from __future__ import annotations

from backend import (
    DEFAULT_CATALOG_PATH,
    DEFAULT_REST_SECONDS,
    REST_TICK_INTERVAL,
)
from backend.prescription import (
    PlanExercise,
    Prescription,
    SetGroup,
    SetGroupType,
    SetSpec,
    TrainingDay,
    TrainingPlan,
)
from backend.catalog import CatalogError, get_active_plan, load_training_plans
from backend.progress import ExerciseProgressAggregator, ExerciseStatus
from backend.session_state import Phase
from backend.workout_session import SessionReport, WorkoutSession
from backend.day_schedule import DaySchedule

__all__ = [
    "DEFAULT_CATALOG_PATH",
    "DEFAULT_REST_SECONDS",
    "REST_TICK_INTERVAL",
    "CatalogError",
    "DaySchedule",
    "ExerciseProgressAggregator",
    "ExerciseStatus",
    "Phase",
    "PlanExercise",
    "Prescription",
    "SessionReport",
    "SetGroup",
    "SetGroupType",
    "SetSpec",
    "TrainingDay",
    "TrainingPlan",
    "WorkoutSession",
    "get_active_plan",
    "load_training_plans",
]
