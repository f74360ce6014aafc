"""Mock clock providers for testing."""

from dishka import Scope, provide

from lunabeam.util.clock import Clock, FrozenClock
from lunabeam.util.di.infrastructure.clock import ClockProvider


class MockClockProvider(ClockProvider):
    """Mock clock provider with a frozen, advanceable clock."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_frozen_clock(self) -> FrozenClock:
        return FrozenClock()

    @provide(scope=Scope.APP)
    def get_clock(self, clock: FrozenClock) -> Clock:
        """Provide the frozen clock."""
        return clock
