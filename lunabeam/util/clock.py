"""Time source."""

from datetime import datetime, timedelta, timezone


class Clock:
    """Source of the current time, injected so that expiry can be tested."""

    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""
        return datetime.now(timezone.utc)


class FrozenClock(Clock):
    """Clock that stands still until advanced. For tests."""

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, delta: timedelta) -> None:
        self._now += delta

    def set(self, now: datetime) -> None:
        self._now = now
