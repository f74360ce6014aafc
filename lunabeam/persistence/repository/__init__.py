"""PostgreSQL repository implementations."""

from lunabeam.persistence.repository.claim import PostgresClaimRepository
from lunabeam.persistence.repository.credential import PostgresCredentialRepository
from lunabeam.persistence.repository.profile import PostgresProfileRepository
from lunabeam.persistence.repository.supporter import PostgresSupporterRepository

__all__ = [
    "PostgresClaimRepository",
    "PostgresCredentialRepository",
    "PostgresProfileRepository",
    "PostgresSupporterRepository",
]
