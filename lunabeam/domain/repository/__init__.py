"""Repository interfaces for the LunaBeam domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from lunabeam.domain.repository.claim import ClaimRepository
from lunabeam.domain.repository.credential import CredentialRepository
from lunabeam.domain.repository.profile import ProfileRepository
from lunabeam.domain.repository.supporter import SupporterRepository
from lunabeam.domain.repository.transaction import TransactionManager

__all__ = [
    "ClaimRepository",
    "CredentialRepository",
    "ProfileRepository",
    "SupporterRepository",
    "TransactionManager",
]
