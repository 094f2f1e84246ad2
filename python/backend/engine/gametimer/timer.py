"""One-second periodic task used to drive the game clock.

The game starts a ticker when play begins and stops it when the puzzle is
solved, a new game starts, or the frontend tears down.  A stopped ticker
never calls back.
"""

from __future__ import annotations

import time
from typing import Callable, Protocol

TickCallback = Callable[[], None]

TICK_SECONDS = 1.0


class Ticker(Protocol):
    """Anything that can call *callback* once per second until stopped."""

    @property
    def active(self) -> bool: ...

    def start(self, callback: TickCallback) -> None: ...

    def stop(self) -> None: ...


class ManualTicker:
    """Ticker whose seconds are fired by hand (tests, headless sessions)."""

    def __init__(self) -> None:
        self._callback: TickCallback | None = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def fire(self, n: int = 1) -> int:
        """Deliver *n* ticks; returns how many were delivered."""
        fired = 0
        for _ in range(n):
            if self._callback is None:
                break
            self._callback()
            fired += 1
        return fired


class ClockTicker:
    """Monotonic-clock ticker for poll-driven loops.

    Call :meth:`pump` as often as convenient; it delivers one callback for
    every whole second elapsed since :meth:`start`.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._callback: TickCallback | None = None
        self._next_due: float = 0.0

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback
        self._next_due = self._clock() + TICK_SECONDS

    def stop(self) -> None:
        self._callback = None

    def pump(self, now: float | None = None) -> int:
        """Deliver any ticks that are due; returns how many fired."""
        now = self._clock() if now is None else now
        fired = 0
        while self._callback is not None and now >= self._next_due:
            self._next_due += TICK_SECONDS
            self._callback()
            fired += 1
        return fired

    def until_next(self, now: float | None = None) -> float:
        """Seconds until the next tick is due (``TICK_SECONDS`` when idle)."""
        if self._callback is None:
            return TICK_SECONDS
        now = self._clock() if now is None else now
        return max(0.0, self._next_due - now)
