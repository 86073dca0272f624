"""Injectable clock so time-relative scheduling can be tested without real delays."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current wall-clock time in UTC."""
    return datetime.now(UTC)


class FrozenClock:
    """Clock that only moves when told to.

    Instances are callable, so they can be passed anywhere a Clock is expected.
    """

    def __init__(self, current: datetime) -> None:
        if current.tzinfo is None:
            raise ValueError("FrozenClock requires a timezone-aware datetime")
        self.current = current

    def __call__(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> datetime:
        self.current = self.current + delta
        return self.current

    def set(self, current: datetime) -> None:
        if current.tzinfo is None:
            raise ValueError("FrozenClock requires a timezone-aware datetime")
        self.current = current
