"""
Record clocks.

Every created_at/updated_at stamp and the healthcheck timestamp come from a
``Clock`` handed to the service at construction.  Nothing else in the
kernel reads the wall clock.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

DEFAULT_TEST_START = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class Clock(ABC):
    """Source of the current instant as an aware UTC ``datetime``."""

    @abstractmethod
    def now_utc(self) -> datetime:
        ...


class SystemClock(Clock):
    """Wall-clock time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Clock that only moves when told to.

    Repeated ``now_utc()`` calls return the same instant, which is what
    lets tests assert exact record timestamps and exercise updates that
    happen "at the same time" as the create.
    """

    def __init__(self, start: datetime | None = None):
        start = start or DEFAULT_TEST_START
        if start.tzinfo is None:
            raise ValueError("DeterministicClock needs a timezone-aware start")
        self._current = start.astimezone(timezone.utc)

    def now_utc(self) -> datetime:
        return self._current

    def set_time(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            raise ValueError("set_time needs a timezone-aware datetime")
        self._current = instant.astimezone(timezone.utc)

    def advance(self, delta: timedelta | float = 1) -> datetime:
        """Move forward by ``delta`` (seconds or a timedelta); returns the new instant."""
        if not isinstance(delta, timedelta):
            delta = timedelta(seconds=delta)
        self._current += delta
        return self._current

    def tick(self) -> datetime:
        return self.advance(1)
