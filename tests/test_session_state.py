import pytest

from backend.prescription import Prescription, SetGroup, SetSpec
from backend.session_state import Action, Phase, initial_state, transition


def test_initial_state_layout(ragged_prescription):
    state = initial_state(ragged_prescription, default_rest_seconds=60)
    assert state.phase is Phase.IDLE
    assert state.offsets == (0, 2, 2, 5)
    assert state.rest_after == (5, 3, 2, 60, 60)
    assert state.completion == (False,) * 5
    assert state.completion_matrix() == [[False, False], [], [False, False, False]]
    assert state.cursor_position() is None


def test_position_of_maps_flat_index(ragged_prescription):
    state = initial_state(ragged_prescription)
    assert [state.position_of(i) for i in range(5)] == [
        (0, 0),
        (0, 1),
        (2, 0),
        (2, 1),
        (2, 2),
    ]
    with pytest.raises(IndexError):
        state.position_of(5)


def test_transition_is_pure(three_set_prescription):
    idle = initial_state(three_set_prescription)
    active = transition(idle, Action.START)
    assert idle.phase is Phase.IDLE
    assert active.phase is Phase.ACTIVE
    assert active.cursor == 0

    resting = transition(active, Action.COMPLETE_SET)
    assert active.completion == (False, False, False)
    assert resting.completion == (True, False, False)
    assert resting.phase is Phase.RESTING
    assert resting.rest_remaining_seconds == 45
    assert resting.cursor == 1


def test_invalid_actions_return_same_state(three_set_prescription):
    idle = initial_state(three_set_prescription)
    assert transition(idle, Action.COMPLETE_SET) is idle
    assert transition(idle, Action.TICK) is idle
    assert transition(idle, Action.CLOSE) is idle

    active = transition(idle, Action.START)
    assert transition(active, Action.START) is active
    assert transition(active, Action.TICK) is active

    resting = transition(active, Action.COMPLETE_SET)
    assert transition(resting, Action.COMPLETE_SET) is resting


def test_tick_counts_down_to_active(three_set_prescription):
    state = transition(
        transition(initial_state(three_set_prescription), Action.START),
        Action.COMPLETE_SET,
    )
    for expected in range(44, 0, -1):
        state = transition(state, Action.TICK)
        assert state.phase is Phase.RESTING
        assert state.rest_remaining_seconds == expected
    state = transition(state, Action.TICK)
    assert state.phase is Phase.ACTIVE
    assert state.rest_remaining_seconds == 0
    assert state.cursor == 1


def test_final_set_goes_straight_to_completed():
    prescription = Prescription("p", [SetGroup(sets=[SetSpec(reps=3, rest_time_seconds=30)])])
    state = transition(initial_state(prescription), Action.START)
    state = transition(state, Action.COMPLETE_SET)
    assert state.phase is Phase.COMPLETED
    assert state.rest_remaining_seconds == 0
    assert state.cursor is None
    assert state.completed_sets == 1


def test_closed_state_rejects_everything(three_set_prescription):
    state = transition(initial_state(three_set_prescription), Action.START)
    closed = transition(state, Action.CLOSE)
    assert closed.closed
    for action in Action:
        assert transition(closed, action) is closed


def test_dispose_works_from_idle(three_set_prescription):
    idle = initial_state(three_set_prescription)
    disposed = transition(idle, Action.DISPOSE)
    assert disposed.closed
    assert transition(disposed, Action.START) is disposed


def test_version_increases_on_every_change(three_set_prescription):
    state = initial_state(three_set_prescription)
    versions = [state.version]
    for action in (Action.START, Action.COMPLETE_SET, Action.TICK, Action.CLOSE):
        state = transition(state, action)
        versions.append(state.version)
    assert versions == sorted(set(versions))


def test_completed_sets_counts_cells(ragged_prescription):
    state = transition(initial_state(ragged_prescription), Action.START)
    state = transition(state, Action.COMPLETE_SET)
    assert state.completed_sets == sum(sum(row) for row in state.completion_matrix())


def test_actions_accept_plain_strings(three_set_prescription):
    state = transition(initial_state(three_set_prescription), "start")
    assert state.phase is Phase.ACTIVE
