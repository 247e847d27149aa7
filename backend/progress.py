"""Per-exercise progress for the day being trained."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence, TypeVar

from backend.workout_session import SessionReport


class ExerciseStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class ProgressRecord:
    """Summary of the reports received for one exercise."""

    is_started: bool = False
    is_completed: bool = False
    completed_sets: int = 0
    total_sets: int = 0


@dataclass(frozen=True)
class DaySummary:
    completed_exercises: int
    total_exercises: int
    completed_sets: int
    total_sets: int

    @property
    def is_completed(self) -> bool:
        return self.total_exercises > 0 and self.completed_exercises == self.total_exercises


_E = TypeVar("_E")


def _exercise_id(exercise) -> str:
    # plan exercises carry an ``id``; bare ids are accepted as well
    return exercise if isinstance(exercise, str) else exercise.id


class ExerciseProgressAggregator:
    """Keep one :class:`ProgressRecord` per exercise.

    Records are only changed through :meth:`on_session_report` and only
    removed by :meth:`reset_day`.
    """

    def __init__(self) -> None:
        self._records: dict[str, ProgressRecord] = {}

    def on_session_report(
        self,
        exercise_id: str,
        is_completed: bool,
        completed_sets: int,
        total_sets: int,
    ) -> ProgressRecord:
        """Create or update the record of ``exercise_id``.

        ``total_sets`` is taken from the first report only; later reports
        cannot change it.
        """

        record = self._records.get(exercise_id)
        if record is None:
            record = ProgressRecord(total_sets=total_sets)
            self._records[exercise_id] = record
        record.is_started = True
        record.is_completed = bool(is_completed)
        record.completed_sets = completed_sets
        logging.debug(
            "Progress for %s: %d/%d sets, completed=%s",
            exercise_id,
            record.completed_sets,
            record.total_sets,
            record.is_completed,
        )
        return record

    def handle_report(self, report: SessionReport) -> ProgressRecord:
        """Listener adapter for :class:`~backend.workout_session.WorkoutSession`."""
        return self.on_session_report(
            report.exercise_id,
            report.is_completed,
            report.completed_sets,
            report.total_sets,
        )

    def record(self, exercise_id: str) -> ProgressRecord | None:
        return self._records.get(exercise_id)

    @property
    def records(self) -> dict[str, ProgressRecord]:
        """Return a copy of all records keyed by exercise id."""
        return dict(self._records)

    def status_of(self, exercise_id: str) -> ExerciseStatus:
        record = self._records.get(exercise_id)
        if record is None:
            return ExerciseStatus.NOT_STARTED
        if record.is_completed:
            return ExerciseStatus.COMPLETED
        return ExerciseStatus.IN_PROGRESS

    def next_incomplete(self, exercises: Sequence[_E]) -> _E | None:
        """Return the first exercise in list order that is not completed."""
        for exercise in exercises:
            if self.status_of(_exercise_id(exercise)) is not ExerciseStatus.COMPLETED:
                return exercise
        return None

    def completed_count(self, exercises: Iterable) -> int:
        return sum(
            1
            for exercise in exercises
            if self.status_of(_exercise_id(exercise)) is ExerciseStatus.COMPLETED
        )

    def day_summary(self, exercises: Sequence) -> DaySummary:
        """Return completion counts for the whole day.

        Set totals for exercises without a record come from the exercise
        itself when it exposes ``total_sets``.
        """

        completed_sets = 0
        total_sets = 0
        for exercise in exercises:
            record = self._records.get(_exercise_id(exercise))
            if record is not None:
                completed_sets += record.completed_sets
                total_sets += record.total_sets
            else:
                total_sets += getattr(exercise, "total_sets", 0)
        return DaySummary(
            completed_exercises=self.completed_count(exercises),
            total_exercises=len(exercises),
            completed_sets=completed_sets,
            total_sets=total_sets,
        )

    def reset_day(self) -> None:
        """Forget every record, e.g. when the day is restarted."""
        logging.info("Resetting progress for %d exercises", len(self._records))
        self._records.clear()
