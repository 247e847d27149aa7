"""Single cancellable periodic tick used for rest countdowns."""

from __future__ import annotations

import logging
from typing import Callable

from kivy.clock import Clock

from backend import REST_TICK_INTERVAL


class RestTimer:
    """Own at most one scheduled interval at a time.

    ``clock`` only needs ``schedule_interval(callback, interval)`` returning an
    event with ``cancel()``, which is what :data:`kivy.clock.Clock` provides.
    Tests pass a fake clock instead.
    """

    def __init__(self, clock=None, interval: float = REST_TICK_INTERVAL) -> None:
        self._clock = clock if clock is not None else Clock
        self.interval = interval
        self._event = None

    @property
    def active(self) -> bool:
        """Return ``True`` while a handle is held."""
        return self._event is not None

    def start(self, callback: Callable[[float], object]) -> None:
        """Schedule ``callback`` every :attr:`interval` seconds.

        Any previously scheduled handle is cancelled first so two countdowns
        never run side by side.
        """

        self.cancel()
        self._event = self._clock.schedule_interval(callback, self.interval)
        logging.debug("Rest timer started (interval %.2fs)", self.interval)

    def cancel(self) -> None:
        """Release the handle if one is held."""
        if self._event is not None:
            self._event.cancel()
            self._event = None
            logging.debug("Rest timer cancelled")

    def __enter__(self) -> "RestTimer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.cancel()
