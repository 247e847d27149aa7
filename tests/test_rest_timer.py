from backend.rest_timer import RestTimer


def test_start_schedules_one_interval(fake_clock):
    ticks = []
    timer = RestTimer(fake_clock, interval=1.0)
    timer.start(ticks.append)
    assert timer.active
    fake_clock.advance(3)
    assert ticks == [1.0, 1.0, 1.0]


def test_restart_cancels_previous_handle(fake_clock):
    first, second = [], []
    timer = RestTimer(fake_clock)
    timer.start(first.append)
    timer.start(second.append)
    assert fake_clock.active_events == 1
    fake_clock.advance(2)
    assert first == []
    assert len(second) == 2


def test_cancel_is_idempotent(fake_clock):
    timer = RestTimer(fake_clock)
    timer.cancel()
    timer.start(lambda dt: None)
    timer.cancel()
    timer.cancel()
    assert not timer.active
    assert fake_clock.active_events == 0


def test_context_manager_cancels(fake_clock):
    with RestTimer(fake_clock) as timer:
        timer.start(lambda dt: None)
        assert fake_clock.active_events == 1
    assert fake_clock.active_events == 0


def test_defaults_to_kivy_clock():
    from kivy.clock import Clock

    timer = RestTimer()
    assert timer._clock is Clock
    assert timer.interval == 1.0
