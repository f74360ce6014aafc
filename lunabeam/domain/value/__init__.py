"""Domain value objects for LunaBeam."""

from lunabeam.domain.value.identifiers import (
    ClaimId,
    IdentityId,
    ProfileId,
    SupporterId,
)
from lunabeam.domain.value.outcome import (
    ClaimOutcome,
    ClaimPreview,
    ClaimValidationResult,
    FinalizedClaim,
    RejectedClaim,
    ValidClaim,
)
from lunabeam.domain.value.types import (
    AccountStatus,
    AuthenticationStatus,
    ClaimStatus,
    ClaimToken,
    EmailAddress,
    Passcode,
    PermissionLevel,
    SupporterRole,
)

__all__ = [
    # Identifiers
    "ClaimId",
    "IdentityId",
    "ProfileId",
    "SupporterId",
    # Types
    "AccountStatus",
    "AuthenticationStatus",
    "ClaimStatus",
    "ClaimToken",
    "EmailAddress",
    "Passcode",
    "PermissionLevel",
    "SupporterRole",
    # Outcomes
    "ClaimOutcome",
    "ClaimPreview",
    "ClaimValidationResult",
    "FinalizedClaim",
    "RejectedClaim",
    "ValidClaim",
]
