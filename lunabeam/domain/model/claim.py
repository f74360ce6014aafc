"""Account claim entity.

A claim lets a supporter hand over an account they provisioned for an
individual. The invitee opens the claim link (token), proves they are the
intended recipient with a passcode received out of band, and sets a
password.
"""

import hmac
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, model_validator

from lunabeam.domain.model.common import DomainModel
from lunabeam.domain.value import (
    ClaimId,
    ClaimStatus,
    ClaimToken,
    EmailAddress,
    IdentityId,
    Passcode,
)


class Claim(DomainModel):
    """Account claim entity.

    Business rules:
    - Token and passcode are two distinct secrets and never change
    - At most one pending claim per subject identity
    - Usable for finalization only while pending and before expires_at
    - Accepted claims record when and by which identity they were claimed
    - Claims are never deleted; terminal claims remain as an audit trail
    """

    id: ClaimId
    token: ClaimToken
    passcode: Passcode
    subject_id: IdentityId  # Account being claimed
    issuer_id: Optional[IdentityId] = None  # Provisioning supporter, None if self-serve
    invitee_contact: EmailAddress
    display_name: str = Field(min_length=1, max_length=255)
    status: ClaimStatus = ClaimStatus.PENDING
    issued_at: datetime
    expires_at: datetime
    claimed_at: Optional[datetime] = None
    claimed_identity_id: Optional[IdentityId] = None  # Identity bound at acceptance
    revoked_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_lifecycle_fields(self) -> "Claim":
        """Reject field combinations that no lifecycle transition produces."""
        if self.expires_at <= self.issued_at:
            raise ValueError("expires_at must be after issued_at")

        accepted = self.status == ClaimStatus.ACCEPTED
        if accepted != (self.claimed_at is not None):
            raise ValueError("claimed_at is set if and only if the claim is accepted")
        if accepted != (self.claimed_identity_id is not None):
            raise ValueError(
                "claimed_identity_id is set if and only if the claim is accepted"
            )

        revoked = self.status == ClaimStatus.REVOKED
        if revoked != (self.revoked_at is not None):
            raise ValueError("revoked_at is set if and only if the claim is revoked")
        return self

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def is_usable(self, now: datetime) -> bool:
        """Whether the claim can still be finalized."""
        return self.status == ClaimStatus.PENDING and not self.is_expired(now)

    def passcode_matches(self, candidate: str) -> bool:
        """Constant-time, case-insensitive passcode comparison."""
        return hmac.compare_digest(
            candidate.strip().upper().encode(), self.passcode.root.encode()
        )

    def contact_matches(self, contact: str) -> bool:
        """Constant-time comparison against the normalised invitee contact."""
        return hmac.compare_digest(
            contact.strip().lower().encode(), self.invitee_contact.root.encode()
        )

    def accept(self, identity_id: IdentityId, now: datetime) -> "Claim":
        """Return the accepted version of this claim."""
        return self._transition(
            status=ClaimStatus.ACCEPTED,
            claimed_at=now,
            claimed_identity_id=identity_id,
        )

    def revoke(self, now: datetime) -> "Claim":
        """Return the revoked version of this claim."""
        return self._transition(status=ClaimStatus.REVOKED, revoked_at=now)

    def expire(self) -> "Claim":
        """Return this claim with its derived expiry materialised."""
        return self._transition(status=ClaimStatus.EXPIRED)

    def _transition(self, **changes: Any) -> "Claim":
        if self.status != ClaimStatus.PENDING:
            raise ValueError(f"Cannot transition a {self.status.value} claim")
        # Re-validate so the lifecycle invariants hold for the new state
        return Claim.model_validate({**self.model_dump(), **changes})
