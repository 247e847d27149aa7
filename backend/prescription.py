"""Immutable description of the work prescribed for an exercise.

These objects are produced by the catalog loader (:mod:`backend.catalog`)
and consumed read-only by :class:`backend.workout_session.WorkoutSession`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SetGroupType(str, Enum):
    """Structural tag of a set group.

    The tag is display metadata only. Every group is traversed set by set in
    order regardless of its type.
    """

    NORMAL = "normal"
    DROP_SET = "drop-set"
    PYRAMID_UP = "pyramid-up"
    PYRAMID_DOWN = "pyramid-down"
    PYRAMID_FULL = "pyramid-full"
    SUPER_SET = "super-set"
    GIANT_SET = "giant-set"


@dataclass(frozen=True)
class SetSpec:
    """One prescribed unit of work."""

    reps: int
    weight: float = 0.0
    rpe: float | None = None
    # rest owed *after* this set, ``None`` means the default applies
    rest_time_seconds: int | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        if self.reps < 0:
            raise ValueError("reps must be non-negative")
        if self.weight < 0:
            raise ValueError("weight must be non-negative")
        if self.rest_time_seconds is not None and self.rest_time_seconds < 0:
            raise ValueError("rest_time_seconds must be non-negative")


@dataclass(frozen=True)
class SetGroup:
    """Ordered sets sharing a structural type tag."""

    sets: tuple[SetSpec, ...] = ()
    type: SetGroupType = SetGroupType.NORMAL
    notes: str | None = None

    def __post_init__(self) -> None:
        # accept lists from callers but store an immutable tuple
        object.__setattr__(self, "sets", tuple(self.sets))
        object.__setattr__(self, "type", SetGroupType(self.type))

    def __len__(self) -> int:
        return len(self.sets)


@dataclass(frozen=True)
class Prescription:
    """Everything a trainee has to do for one exercise.

    An empty ``groups`` tuple is valid and means nothing is prescribed.
    """

    exercise_id: str
    groups: tuple[SetGroup, ...] = ()
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "groups", tuple(self.groups))

    @property
    def total_sets(self) -> int:
        """Return the number of sets across every group."""
        return sum(len(group.sets) for group in self.groups)

    def flat_sets(self) -> list[SetSpec]:
        """Return all sets in reading order."""
        return [spec for group in self.groups for spec in group.sets]


@dataclass(frozen=True)
class PlanExercise:
    """An exercise scheduled on a training day."""

    id: str
    name: str
    prescription: Prescription
    notes: str | None = None
    muscle_group: str | None = None
    sub_muscle_groups: tuple[str, ...] = ()

    @property
    def total_sets(self) -> int:
        return self.prescription.total_sets


@dataclass(frozen=True)
class TrainingDay:
    """The exercises planned for one day of the week.

    ``day_of_week`` counts from Sunday, i.e. ``0`` is Sunday and ``6`` is
    Saturday.
    """

    id: str
    name: str
    day_of_week: int
    is_rest_day: bool = False
    exercises: tuple[PlanExercise, ...] = ()
    color: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.day_of_week <= 6:
            raise ValueError("day_of_week must be between 0 and 6")
        object.__setattr__(self, "exercises", tuple(self.exercises))

    def exercise(self, exercise_id: str) -> PlanExercise:
        """Return the exercise with ``exercise_id`` or raise ``KeyError``."""
        for item in self.exercises:
            if item.id == exercise_id:
                return item
        raise KeyError(exercise_id)


@dataclass(frozen=True)
class TrainingPlan:
    """A weekly plan made of training days."""

    id: str
    name: str
    days: tuple[TrainingDay, ...] = ()
    description: str | None = None
    active: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "days", tuple(self.days))

    def day_for(self, day_of_week: int) -> TrainingDay:
        """Return the day scheduled on ``day_of_week``.

        Days without an entry in the plan are reported as an empty rest day.
        """

        for day in self.days:
            if day.day_of_week == day_of_week:
                return day
        return TrainingDay(
            id="empty",
            name="No training scheduled",
            day_of_week=day_of_week,
            is_rest_day=True,
        )
