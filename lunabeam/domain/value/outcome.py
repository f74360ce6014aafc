"""Typed outcomes of claim validation and finalization.

Expected business conditions (unknown token, expiry, reuse, wrong passcode)
are returned as values rather than raised, so callers can render a distinct
message for each case.
"""

from datetime import datetime
from enum import Enum
from typing import Literal

from lunabeam.domain.value.common import ValueObject
from lunabeam.domain.value.identifiers import ClaimId, IdentityId
from lunabeam.domain.value.types import ClaimStatus, EmailAddress


class ClaimOutcome(str, Enum):
    """Outcome of looking up or finalizing a claim."""

    VALID = "valid"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    ALREADY_USED = "already_used"
    INVALID = "invalid"  # Passcode mismatch


_MESSAGES = {
    ClaimOutcome.NOT_FOUND: "Claim not found",
    ClaimOutcome.EXPIRED: "This invitation has expired",
    ClaimOutcome.ALREADY_USED: "This invitation has already been used",
    ClaimOutcome.INVALID: "Incorrect passcode",
}


class ClaimPreview(ValueObject):
    """Fields of a claim that are safe to show before authentication."""

    claim_id: ClaimId
    subject_id: IdentityId
    display_name: str
    masked_contact: str
    expires_at: datetime


class ValidClaim(ValueObject):
    """The claim exists, is pending and has not expired."""

    outcome: Literal[ClaimOutcome.VALID] = ClaimOutcome.VALID
    preview: ClaimPreview

    @property
    def valid(self) -> bool:
        return True


class RejectedClaim(ValueObject):
    """The claim cannot be used.

    ``status`` carries the stored claim status when a claim was found, so
    callers can tell an accepted claim from a revoked one.
    """

    outcome: Literal[
        ClaimOutcome.NOT_FOUND,
        ClaimOutcome.EXPIRED,
        ClaimOutcome.ALREADY_USED,
        ClaimOutcome.INVALID,
    ]
    status: ClaimStatus | None = None

    @property
    def valid(self) -> bool:
        return False

    @property
    def message(self) -> str:
        """User-facing message for this rejection."""
        if self.status == ClaimStatus.REVOKED:
            return "This invitation has been revoked"
        if self.status == ClaimStatus.EXPIRED:
            return _MESSAGES[ClaimOutcome.EXPIRED]
        return _MESSAGES[self.outcome]


ClaimValidationResult = ValidClaim | RejectedClaim


class FinalizedClaim(ValueObject):
    """Result of a successful finalization.

    Carries what the caller needs to sign the individual in immediately.
    """

    claim_id: ClaimId
    identity_id: IdentityId
    display_name: str
    contact: EmailAddress
    claimed_at: datetime
