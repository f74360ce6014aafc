"""Mock providers for testing."""

from .clock import MockClockProvider
from .notifier import MockNotifierProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockClockProvider",
    "MockNotifierProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
