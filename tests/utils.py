"""Test helpers shared by the session tests."""


class FakeEvent:
    def __init__(self, clock, callback, interval):
        self.clock = clock
        self.callback = callback
        self.interval = interval
        self.elapsed = 0.0
        self.cancelled = False

    def cancel(self):
        self.cancelled = True
        if self in self.clock.events:
            self.clock.events.remove(self)


class FakeClock:
    """Stand-in for :data:`kivy.clock.Clock` that only moves when told to.

    Like Kivy, a callback returning ``False`` unschedules its event.
    """

    def __init__(self):
        self.events: list[FakeEvent] = []
        self.scheduled = 0

    def schedule_interval(self, callback, interval):
        event = FakeEvent(self, callback, interval)
        self.events.append(event)
        self.scheduled += 1
        return event

    def advance(self, seconds: float, step: float = 1.0) -> None:
        """Move time forward by ``seconds`` in increments of ``step``."""
        ticks = int(round(seconds / step))
        for _ in range(ticks):
            for event in list(self.events):
                if event.cancelled:
                    continue
                event.elapsed += step
                while event.elapsed >= event.interval and not event.cancelled:
                    event.elapsed -= event.interval
                    if event.callback(event.interval) is False:
                        event.cancel()

    @property
    def active_events(self) -> int:
        return len(self.events)
