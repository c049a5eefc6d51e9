from __future__ import annotations

import time
from typing import Callable, Protocol


class Clock(Protocol):
    """Monotonic clock abstraction.

    Core logic depends on this interface rather than calling real time directly.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class TimerHandle(Protocol):
    def cancel(self) -> None:
        """Stop the timer. Calling it more than once is harmless."""


class Scheduler(Protocol):
    """Runs a callback repeatedly on the owner's event loop."""

    def schedule_repeating(self, interval_s: float, callback: Callable[[], None]) -> TimerHandle:
        ...
