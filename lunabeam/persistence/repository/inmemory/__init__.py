"""In-memory repository implementations for testing."""

from .claim import InMemoryClaimRepository
from .credential import InMemoryCredentialRepository
from .profile import InMemoryProfileRepository
from .supporter import InMemorySupporterRepository
from .transaction import InMemoryTransactionManager

__all__ = [
    "InMemoryClaimRepository",
    "InMemoryCredentialRepository",
    "InMemoryProfileRepository",
    "InMemorySupporterRepository",
    "InMemoryTransactionManager",
]
