"""Day selection and session wiring behind the schedule screen.

Days are selected with a Monday-first index (``0`` is Monday, ``6`` is
Sunday) while :class:`~backend.prescription.TrainingDay` stores a
Sunday-first ``day_of_week``; :func:`to_day_of_week` converts between them.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from backend import DEFAULT_REST_SECONDS
from backend.prescription import PlanExercise, TrainingDay, TrainingPlan
from backend.progress import DaySummary, ExerciseProgressAggregator, ExerciseStatus
from backend.session_state import Phase
from backend.workout_session import WorkoutSession


def to_day_of_week(monday_index: int) -> int:
    """Convert a Monday-first index to a Sunday-first ``day_of_week``."""
    return (monday_index + 1) % 7


def week_dates(today: date) -> list[date]:
    """Return the dates of the week containing ``today``, Monday first."""
    monday = today - timedelta(days=today.weekday())
    return [monday + timedelta(days=offset) for offset in range(7)]


class DaySchedule:
    """Pick the day and exercise to train and run its session.

    Only one session is open at a time; opening another exercise closes the
    current one first, which reports its partial progress.  Progress is kept
    per selected day so the same exercise on two days is tracked separately.
    """

    def __init__(
        self,
        plan: TrainingPlan,
        *,
        clock=None,
        today: date | None = None,
        default_rest_seconds: int = DEFAULT_REST_SECONDS,
    ) -> None:
        self.plan = plan
        self.clock = clock
        self.today = today or date.today()
        self.default_rest_seconds = default_rest_seconds
        self.selected_index: int = self.today.weekday()
        self.active_session: WorkoutSession | None = None
        self.active_exercise: PlanExercise | None = None
        self._aggregators: dict[int, ExerciseProgressAggregator] = {}

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def today_index(self) -> int:
        return self.today.weekday()

    def week_dates(self) -> list[date]:
        return week_dates(self.today)

    @property
    def selected_day(self) -> TrainingDay:
        return self.plan.day_for(to_day_of_week(self.selected_index))

    @property
    def exercises(self) -> tuple[PlanExercise, ...]:
        return self.selected_day.exercises

    @property
    def aggregator(self) -> ExerciseProgressAggregator:
        """Progress of the selected day."""
        aggregator = self._aggregators.get(self.selected_index)
        if aggregator is None:
            aggregator = ExerciseProgressAggregator()
            self._aggregators[self.selected_index] = aggregator
        return aggregator

    def select_day(self, index: int) -> TrainingDay:
        """Select the day at Monday-first ``index`` and return it."""
        if not 0 <= index <= 6:
            raise ValueError("day index must be between 0 and 6")
        if index != self.selected_index:
            self.close_exercise()
            self.selected_index = index
        return self.selected_day

    def select_plan(self, plan: TrainingPlan) -> None:
        """Switch to ``plan``, dropping all progress."""
        self.close_exercise()
        self.plan = plan
        self._aggregators.clear()

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def open_exercise(self, exercise_id: str) -> WorkoutSession:
        """Start a session for ``exercise_id`` on the selected day.

        Raises ``KeyError`` if the exercise is not scheduled that day.
        """

        exercise = self.selected_day.exercise(exercise_id)
        self.close_exercise()
        aggregator = self.aggregator
        session = WorkoutSession(
            exercise.prescription,
            clock=self.clock,
            default_rest_seconds=self.default_rest_seconds,
            on_report=aggregator.handle_report,
        )
        session.start()
        if session.phase is Phase.COMPLETED:
            # nothing prescribed, count it as done so it never blocks the day
            aggregator.on_session_report(exercise.id, True, 0, 0)
        self.active_session = session
        self.active_exercise = exercise
        logging.info("Opened %s on %s", exercise.name, self.selected_day.name)
        return session

    def continue_training(self) -> WorkoutSession | None:
        """Open the first exercise of the day that is not completed."""
        exercise = self.aggregator.next_incomplete(self.exercises)
        if exercise is None:
            return None
        return self.open_exercise(exercise.id)

    def close_exercise(self) -> None:
        """Close the open session, reporting partial progress."""
        session = self.active_session
        if session is None:
            return
        self.active_session = None
        self.active_exercise = None
        session.close()

    def restart_day(self) -> None:
        """Discard the open session and all progress of the selected day."""
        session = self.active_session
        self.active_session = None
        self.active_exercise = None
        if session is not None:
            session.dispose()
        self.aggregator.reset_day()

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def status_of(self, exercise_id: str) -> ExerciseStatus:
        return self.aggregator.status_of(exercise_id)

    def summary(self) -> DaySummary:
        return self.aggregator.day_summary(self.exercises)
