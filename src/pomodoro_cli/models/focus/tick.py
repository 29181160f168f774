"""Tick sources driving the timer once per second."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol

TickCallback = Callable[[], None]


class TickSource(Protocol):
    """Periodic 1-second callback driver."""

    def start(self, callback: TickCallback) -> None: ...

    def stop(self) -> None: ...


class ManualTickSource:
    """Tick source driven explicitly, e.g. from tests."""

    def __init__(self):
        self._callback: TickCallback | None = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def fire(self, times: int = 1) -> int:
        """Deliver up to *times* ticks. Returns how many were delivered.

        Delivery stops early when the callback stops the source, which is what
        happens when a session completes.
        """
        delivered = 0
        for _ in range(times):
            if self._callback is None:
                break
            self._callback()
            delivered += 1
        return delivered


class MonotonicTickSource:
    """Cooperative tick source polled from the caller's event loop.

    ``poll()`` invokes the callback once for every whole second elapsed since
    the source was started, on the polling thread.
    """

    def __init__(self, interval: float = 1.0, clock: Callable[[], float] = time.monotonic):
        self.interval = interval
        self._clock = clock
        self._callback: TickCallback | None = None
        self._next_tick: float | None = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback
        self._next_tick = self._clock() + self.interval

    def stop(self) -> None:
        self._callback = None
        self._next_tick = None

    def poll(self, now: float | None = None) -> int:
        """Fire any ticks that are due. Returns the number fired."""
        if now is None:
            now = self._clock()

        fired = 0
        while self._callback is not None and self._next_tick is not None:
            if now < self._next_tick:
                break
            self._next_tick += self.interval
            self._callback()
            fired += 1
        return fired
