"""Guided execution of one exercise's prescription.

A :class:`WorkoutSession` walks through every set of a
:class:`~backend.prescription.Prescription` in reading order.  After each
set except the last it enforces the prescribed rest with a one second
countdown driven by :class:`~backend.rest_timer.RestTimer`.  Progress is
reported to listeners as :class:`SessionReport` objects:

* once when the last set is completed (``is_completed=True``)
* once when the session is closed early with at least one completed set
  (``is_completed=False``)

All state lives in an immutable :class:`~backend.session_state.SessionState`
that is replaced on every change, so screens can read it at any time
without worrying about partial updates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from backend import DEFAULT_REST_SECONDS
from backend.prescription import Prescription, SetGroup, SetSpec
from backend.rest_timer import RestTimer
from backend.session_state import (
    Action,
    Phase,
    SessionState,
    initial_state,
    transition,
)


@dataclass(frozen=True)
class SessionReport:
    """Progress emitted by a session to its host."""

    exercise_id: str
    is_completed: bool
    completed_sets: int
    total_sets: int


Listener = Callable[[SessionReport], object]


class WorkoutSession:
    """Run-time engine for a single exercise."""

    def __init__(
        self,
        prescription: Prescription,
        *,
        clock=None,
        default_rest_seconds: int = DEFAULT_REST_SECONDS,
        on_report: Listener | None = None,
    ) -> None:
        self.prescription = prescription
        self.default_rest_seconds = default_rest_seconds
        self._state: SessionState = initial_state(prescription, default_rest_seconds)
        self._timer = RestTimer(clock)
        self._listeners: list[Listener] = []
        if on_report is not None:
            self._listeners.append(on_report)
        # set while a completion is being applied so nested calls are dropped
        self._transitioning = False

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, is_completed: bool) -> None:
        report = SessionReport(
            exercise_id=self.prescription.exercise_id,
            is_completed=is_completed,
            completed_sets=self._state.completed_sets,
            total_sets=self._state.total_sets,
        )
        logging.info(
            "Session report for %s: completed=%s sets=%d/%d",
            report.exercise_id,
            report.is_completed,
            report.completed_sets,
            report.total_sets,
        )
        for listener in list(self._listeners):
            listener(report)

    # ------------------------------------------------------------------
    # Read-only view for screens
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def version(self) -> int:
        """Counter bumped on every state change.

        Screens pass the value they rendered to :meth:`complete_current_set`
        so a double tap cannot complete two sets.
        """
        return self._state.version

    @property
    def cursor(self) -> tuple[int, int] | None:
        return self._state.cursor_position()

    @property
    def current_group(self) -> SetGroup | None:
        position = self.cursor
        if position is None:
            return None
        return self.prescription.groups[position[0]]

    @property
    def current_set(self) -> SetSpec | None:
        position = self.cursor
        if position is None:
            return None
        group_index, set_index = position
        return self.prescription.groups[group_index].sets[set_index]

    @property
    def rest_remaining_seconds(self) -> int:
        """Seconds of rest left; ``0`` unless resting."""
        if self._state.phase is not Phase.RESTING:
            return 0
        return self._state.rest_remaining_seconds

    @property
    def completion(self) -> list[list[bool]]:
        return self._state.completion_matrix()

    @property
    def total_sets(self) -> int:
        return self._state.total_sets

    @property
    def completed_sets(self) -> int:
        return self._state.completed_sets

    @property
    def is_resting(self) -> bool:
        return self._state.phase is Phase.RESTING and not self._state.closed

    @property
    def is_closed(self) -> bool:
        return self._state.closed

    @property
    def can_complete(self) -> bool:
        """Return ``True`` if the complete button should be enabled."""
        return self._state.phase is Phase.ACTIVE and not self._state.closed

    @property
    def timer_active(self) -> bool:
        return self._timer.active

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def _apply(self, action: Action) -> tuple[SessionState, SessionState]:
        before = self._state
        self._state = transition(before, action)
        return before, self._state

    def start(self, prescription: Prescription | None = None) -> bool:
        """Begin the session.

        ``prescription`` replaces the one given to the constructor, which is
        only allowed before the session started.  Returns ``False`` when the
        session was already started.  An empty prescription completes
        immediately without a report.
        """

        if self._state.phase is not Phase.IDLE or self._state.closed:
            logging.debug("Ignoring start of %s: already started", self.prescription.exercise_id)
            return False
        if prescription is not None:
            self.prescription = prescription
            self._state = initial_state(prescription, self.default_rest_seconds)
        _, after = self._apply(Action.START)
        logging.info(
            "Started session for %s with %d sets",
            self.prescription.exercise_id,
            after.total_sets,
        )
        return True

    def complete_current_set(self, expected_version: int | None = None) -> bool:
        """Mark the set under the cursor as done.

        Returns ``True`` if a set was completed.  Calls made outside the
        active phase, calls carrying a stale ``expected_version`` and calls
        made while another completion is being applied are ignored.
        """

        if self._transitioning:
            logging.debug("Ignoring reentrant completion")
            return False
        if expected_version is not None and expected_version != self._state.version:
            logging.debug(
                "Ignoring completion for stale version %s (current %s)",
                expected_version,
                self._state.version,
            )
            return False
        self._transitioning = True
        try:
            before, after = self._apply(Action.COMPLETE_SET)
            if after is before:
                logging.debug("Ignoring completion in phase %s", before.phase.value)
                return False
            if after.phase is Phase.RESTING:
                self._timer.start(self._on_tick)
            elif after.phase is Phase.COMPLETED:
                self._timer.cancel()
                self._emit(is_completed=True)
            return True
        finally:
            self._transitioning = False

    def _on_tick(self, dt=None):
        _, after = self._apply(Action.TICK)
        if after.phase is not Phase.RESTING or after.closed:
            self._timer.cancel()
            # returning False also unschedules the Kivy clock event
            return False
        return None

    def close(self) -> bool:
        """Leave the session, reporting partial progress.

        A report with ``is_completed=False`` is sent when at least one set
        was done and the session had not completed.  The rest timer is always
        cancelled.  Returns ``False`` if the session was idle or already
        closed.
        """

        self._timer.cancel()
        before, after = self._apply(Action.CLOSE)
        if after is before:
            return False
        logging.info(
            "Closed session for %s after %d/%d sets",
            self.prescription.exercise_id,
            after.completed_sets,
            after.total_sets,
        )
        if before.phase is not Phase.COMPLETED and after.completed_sets > 0:
            self._emit(is_completed=False)
        return True

    def dispose(self) -> None:
        """Discard the session without reporting anything."""
        self._timer.cancel()
        self._apply(Action.DISPOSE)

    def __enter__(self) -> "WorkoutSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
