"""Infrastructure providers."""

# Import bases
from .clock import ClockProvider
from .notifier import NotifierProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .clock import ProdClockProvider  # noqa: F401
from .notifier import ProdNotifierProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "ClockProvider",
    "NotifierProvider",
    "PersistenceProvider",
    "ProdClockProvider",
    "ProdNotifierProvider",
    "ProdPersistenceProvider",
]
