"""Read-only training plan catalog.

Plans are stored as JSON::

    {"plans": [{"id": ..., "name": ..., "active": true,
                "days": [{"id": ..., "name": ..., "day_of_week": 1,
                          "exercises": [{"id": ..., "name": ...,
                                         "set_groups": [{"type": "normal",
                                                         "sets": [{"reps": 10,
                                                                   "weight": 60,
                                                                   "rest_time": 90}]}]}]}]}]}

``day_of_week`` counts from Sunday (``0``).  ``rest_time`` is in seconds and
may be omitted.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from backend import DEFAULT_CATALOG_PATH
from backend.prescription import (
    PlanExercise,
    Prescription,
    SetGroup,
    SetGroupType,
    SetSpec,
    TrainingDay,
    TrainingPlan,
)


class CatalogError(ValueError):
    """Raised when the catalog document cannot be turned into plans."""


def _require(data: dict, key: str, where: str) -> Any:
    if not isinstance(data, dict):
        raise CatalogError(f"{where}: expected an object")
    if key not in data:
        raise CatalogError(f"{where}: missing '{key}'")
    return data[key]


def parse_set(data: dict, where: str = "set") -> SetSpec:
    try:
        return SetSpec(
            reps=int(_require(data, "reps", where)),
            weight=float(data.get("weight") or 0),
            rpe=None if data.get("rpe") is None else float(data["rpe"]),
            rest_time_seconds=(
                None if data.get("rest_time") is None else int(data["rest_time"])
            ),
            notes=data.get("notes"),
        )
    except (TypeError, ValueError) as exc:
        if isinstance(exc, CatalogError):
            raise
        raise CatalogError(f"{where}: {exc}") from exc


def parse_set_group(data: dict, where: str = "set group") -> SetGroup:
    if not isinstance(data, dict):
        raise CatalogError(f"{where}: expected an object")
    raw_type = data.get("type", SetGroupType.NORMAL.value)
    try:
        group_type = SetGroupType(raw_type)
    except ValueError as exc:
        raise CatalogError(f"{where}: unknown set type {raw_type!r}") from exc
    sets = _require(data, "sets", where)
    if not isinstance(sets, list):
        raise CatalogError(f"{where}: 'sets' must be a list")
    if not sets:
        logging.warning("%s has no sets; it will be skipped", where)
    return SetGroup(
        sets=[parse_set(item, f"{where} set {i + 1}") for i, item in enumerate(sets)],
        type=group_type,
        notes=data.get("notes"),
    )


def parse_exercise(data: dict, where: str = "exercise") -> PlanExercise:
    exercise_id = str(_require(data, "id", where))
    name = str(_require(data, "name", where))
    groups = data.get("set_groups", [])
    if not isinstance(groups, list):
        raise CatalogError(f"{where}: 'set_groups' must be a list")
    prescription = Prescription(
        exercise_id=exercise_id,
        name=name,
        groups=[
            parse_set_group(group, f"{name} group {i + 1}")
            for i, group in enumerate(groups)
        ],
    )
    return PlanExercise(
        id=exercise_id,
        name=name,
        prescription=prescription,
        notes=data.get("notes"),
        muscle_group=data.get("muscle_group"),
        sub_muscle_groups=tuple(data.get("sub_muscle_groups") or ()),
    )


def parse_day(data: dict, where: str = "day") -> TrainingDay:
    day_id = str(_require(data, "id", where))
    exercises = data.get("exercises", [])
    try:
        return TrainingDay(
            id=day_id,
            name=str(_require(data, "name", where)),
            day_of_week=int(_require(data, "day_of_week", where)),
            is_rest_day=bool(data.get("is_rest_day", False)),
            exercises=[
                parse_exercise(item, f"{where} {day_id} exercise {i + 1}")
                for i, item in enumerate(exercises)
            ],
            color=data.get("color"),
        )
    except (TypeError, ValueError) as exc:
        if isinstance(exc, CatalogError):
            raise
        raise CatalogError(f"{where} {day_id}: {exc}") from exc


def parse_plan(data: dict) -> TrainingPlan:
    plan_id = str(_require(data, "id", "plan"))
    return TrainingPlan(
        id=plan_id,
        name=str(_require(data, "name", f"plan {plan_id}")),
        description=data.get("description"),
        active=bool(data.get("active", False)),
        days=[parse_day(day, f"plan {plan_id} day") for day in data.get("days", [])],
    )


def load_training_plans(path: Path = DEFAULT_CATALOG_PATH) -> list[TrainingPlan]:
    """Load every plan stored in ``path``."""

    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            document = json.load(fh)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"{path}: invalid JSON ({exc})") from exc
    except UnicodeDecodeError as exc:
        raise CatalogError(f"{path}: not UTF-8 text ({exc})") from exc
    plans = _require(document, "plans", str(path))
    if not isinstance(plans, list):
        raise CatalogError(f"{path}: 'plans' must be a list")
    loaded = [parse_plan(plan) for plan in plans]
    logging.info("Loaded %d training plans from %s", len(loaded), path)
    return loaded


def get_active_plan(plans: list[TrainingPlan]) -> TrainingPlan | None:
    """Return the active plan, falling back to the first one."""

    for plan in plans:
        if plan.active:
            return plan
    return plans[0] if plans else None
