"""
Clocks and single-slot deadlines polled once per processed frame.
"""
import math
import time
from typing import Optional

from .types import TimerSchedulingError


class SystemClock:
    """
    Seconds since the epoch that never step backwards.

    The wall-clock offset is read once; after that the clock advances with
    time.monotonic().
    """

    def __init__(self):
        self._offset = time.time() - time.monotonic()

    def now(self) -> float:
        return self._offset + time.monotonic()


class ManualClock:
    """Clock that only moves when told to. Used for replays and tests."""

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def set(self, t: float) -> None:
        self._now = float(t)

    def advance(self, dt: float) -> float:
        self._now += dt
        return self._now


class Deadline:
    """
    A cancellable one-shot timer with at most one pending due time.

    Arming again replaces the pending due time, so the latest rearm always wins.
    The owner calls poll() with the current instant; an expired deadline fires
    exactly once and the slot is emptied.
    """

    def __init__(self, name: str):
        self.name = name
        self._due: Optional[float] = None

    @property
    def due(self) -> Optional[float]:
        return self._due

    @property
    def pending(self) -> bool:
        return self._due is not None

    def arm(self, now: float, delay: float) -> float:
        """
        Schedule the deadline `delay` seconds after `now`.

        Raises:
            TimerSchedulingError: if the instant or delay is unusable
        """
        try:
            now = float(now)
            delay = float(delay)
        except (TypeError, ValueError) as e:
            raise TimerSchedulingError(f"{self.name}: cannot schedule ({e})") from e

        if not math.isfinite(now) or not math.isfinite(delay) or delay < 0:
            raise TimerSchedulingError(
                f"{self.name}: cannot schedule delay={delay!r} at now={now!r}"
            )

        self._due = now + delay
        return self._due

    def cancel(self) -> None:
        self._due = None

    def poll(self, now: float) -> Optional[float]:
        """Return the due instant if the deadline has expired, otherwise None."""
        if self._due is not None and now >= self._due:
            fired = self._due
            self._due = None
            return fired
        return None
