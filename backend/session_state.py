"""Run-time state of a guided exercise session and its transition function.

:class:`SessionState` is an immutable value.  Every change goes through
:func:`transition`, which takes a state and an :class:`Action` and returns
the next state.  Invalid actions return the state unchanged so callers can
compare identities to detect a no-op.

Completion is stored as a flat tuple of booleans with a per-group offset
table.  The cursor is a single index into that tuple.  The ragged
``[group][set]`` view needed for rendering is rebuilt on demand by
:meth:`SessionState.completion_matrix`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from backend import DEFAULT_REST_SECONDS
from backend.prescription import Prescription


class Phase(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    RESTING = "resting"
    COMPLETED = "completed"


class Action(str, Enum):
    START = "start"
    COMPLETE_SET = "complete_set"
    TICK = "tick"
    CLOSE = "close"
    DISPOSE = "dispose"


@dataclass(frozen=True)
class SessionState:
    """Snapshot of a session.

    ``offsets`` holds the flat index of the first set of every group followed
    by the total number of sets, so group ``g`` spans
    ``offsets[g]:offsets[g + 1]``.  ``rest_after`` holds the resolved rest for
    every flat set.
    """

    offsets: tuple[int, ...]
    rest_after: tuple[int, ...]
    completion: tuple[bool, ...]
    phase: Phase = Phase.IDLE
    cursor: int | None = None
    rest_remaining_seconds: int = 0
    closed: bool = False
    version: int = 0

    @property
    def total_sets(self) -> int:
        return len(self.completion)

    @property
    def group_count(self) -> int:
        return len(self.offsets) - 1

    @property
    def completed_sets(self) -> int:
        """Number of completed cells; never tracked separately."""
        return sum(1 for done in self.completion if done)

    def completion_matrix(self) -> list[list[bool]]:
        """Return completion as one row per group."""
        return [
            list(self.completion[self.offsets[g] : self.offsets[g + 1]])
            for g in range(self.group_count)
        ]

    def position_of(self, flat_index: int) -> tuple[int, int]:
        """Map ``flat_index`` to ``(group_index, set_index)``.

        Empty groups own no cells, so the first group whose span contains the
        index wins.
        """

        if not 0 <= flat_index < self.total_sets:
            raise IndexError("flat index out of range")
        for g in range(self.group_count):
            start, end = self.offsets[g], self.offsets[g + 1]
            if start <= flat_index < end:
                return g, flat_index - start
        raise IndexError("flat index out of range")  # pragma: no cover

    def cursor_position(self) -> tuple[int, int] | None:
        """Return the cursor as ``(group_index, set_index)`` or ``None``."""
        if self.cursor is None:
            return None
        return self.position_of(self.cursor)


def initial_state(
    prescription: Prescription, default_rest_seconds: int = DEFAULT_REST_SECONDS
) -> SessionState:
    """Build an idle state shaped after ``prescription``."""

    offsets = [0]
    for group in prescription.groups:
        offsets.append(offsets[-1] + len(group.sets))
    # a missing or zero rest falls back to the default
    rest_after = [
        spec.rest_time_seconds or default_rest_seconds
        for spec in prescription.flat_sets()
    ]
    return SessionState(
        offsets=tuple(offsets),
        rest_after=tuple(rest_after),
        completion=(False,) * offsets[-1],
    )


def _start(state: SessionState) -> SessionState:
    if state.phase is not Phase.IDLE or state.closed:
        return state
    if state.total_sets == 0:
        return replace(state, phase=Phase.COMPLETED, version=state.version + 1)
    return replace(state, phase=Phase.ACTIVE, cursor=0, version=state.version + 1)


def _complete_set(state: SessionState) -> SessionState:
    if state.phase is not Phase.ACTIVE or state.closed or state.cursor is None:
        return state
    done = state.cursor
    completion = list(state.completion)
    completion[done] = True
    next_index = done + 1
    if next_index >= state.total_sets:
        # no rest after the final set
        return replace(
            state,
            completion=tuple(completion),
            phase=Phase.COMPLETED,
            cursor=None,
            rest_remaining_seconds=0,
            version=state.version + 1,
        )
    return replace(
        state,
        completion=tuple(completion),
        phase=Phase.RESTING,
        cursor=next_index,
        rest_remaining_seconds=state.rest_after[done],
        version=state.version + 1,
    )


def _tick(state: SessionState) -> SessionState:
    if state.phase is not Phase.RESTING or state.closed:
        return state
    remaining = state.rest_remaining_seconds - 1
    if remaining <= 0:
        return replace(
            state,
            phase=Phase.ACTIVE,
            rest_remaining_seconds=0,
            version=state.version + 1,
        )
    return replace(state, rest_remaining_seconds=remaining, version=state.version + 1)


def _close(state: SessionState) -> SessionState:
    if state.phase is Phase.IDLE or state.closed:
        return state
    return replace(
        state, closed=True, rest_remaining_seconds=0, version=state.version + 1
    )


def _dispose(state: SessionState) -> SessionState:
    if state.closed:
        return state
    return replace(
        state, closed=True, rest_remaining_seconds=0, version=state.version + 1
    )


_TRANSITIONS = {
    Action.START: _start,
    Action.COMPLETE_SET: _complete_set,
    Action.TICK: _tick,
    Action.CLOSE: _close,
    Action.DISPOSE: _dispose,
}


def transition(state: SessionState, action: Action) -> SessionState:
    """Return the state following ``action``.

    The same object is returned when ``action`` is not valid in the current
    phase.
    """

    return _TRANSITIONS[Action(action)](state)
