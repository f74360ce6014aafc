"""Finalize claim use case."""

from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from lunabeam.application.usecase.base import BaseUseCase
from lunabeam.domain.error import NotFoundError
from lunabeam.domain.repository import TransactionManager
from lunabeam.domain.service import (
    ClaimService,
    CredentialService,
    ProfileService,
    SupporterService,
)
from lunabeam.domain.value import (
    ClaimOutcome,
    ClaimStatus,
    ClaimToken,
    FinalizedClaim,
    IdentityId,
    RejectedClaim,
)
from lunabeam.util.clock import Clock


class FinalizeClaimRequest(BaseModel):
    """Finalize claim request."""

    token: str
    passcode: str
    new_credential: str


class FinalizeClaimResponse(BaseModel):
    """Finalize claim response.

    On success carries what the caller needs to sign the individual in.
    """

    success: bool
    outcome: ClaimOutcome | None = None  # Set when rejected
    status: ClaimStatus | None = None
    claim_id: str | None = None
    identity_id: str | None = None
    display_name: str | None = None
    contact: str | None = None
    claimed_at: datetime | None = None
    message: str

    @classmethod
    def rejected(cls, rejection: RejectedClaim) -> "FinalizeClaimResponse":
        return cls(
            success=False,
            outcome=rejection.outcome,
            status=rejection.status,
            message=rejection.message,
        )

    @classmethod
    def finalized(cls, result: FinalizedClaim) -> "FinalizeClaimResponse":
        return cls(
            success=True,
            claim_id=str(result.claim_id),
            identity_id=str(result.identity_id),
            display_name=result.display_name,
            contact=result.contact.root,
            claimed_at=result.claimed_at,
            message="Account claimed successfully",
        )


class FinalizeClaimUseCase(BaseUseCase):
    """Use case for claiming an account with token, passcode and new password.

    All writes happen in one transaction. The pending -> accepted
    conditional write comes first, so a caller that loses a race for the
    same claim returns before touching the credential, profile or
    supporter rows.
    """

    def __init__(
        self,
        claim_service: ClaimService,
        profile_service: ProfileService,
        supporter_service: SupporterService,
        credential_service: CredentialService,
        transactions: TransactionManager,
        clock: Clock,
    ) -> None:
        """Initialize finalize claim use case.

        Args:
            claim_service: Claim domain service
            profile_service: Profile domain service
            supporter_service: Supporter domain service
            credential_service: Credential domain service
            transactions: Transaction boundary
            clock: Time source
        """
        self.claim_service = claim_service
        self.profile_service = profile_service
        self.supporter_service = supporter_service
        self.credential_service = credential_service
        self.transactions = transactions
        self.clock = clock

    async def execute(self, request: FinalizeClaimRequest) -> FinalizeClaimResponse:
        """Finalize a claim.

        Args:
            request: Token, passcode and the password to set

        Returns:
            Finalized claim, or the rejection reason

        Raises:
            CredentialPolicyError: If the new password is too weak
            ContactInUseError: If another account already signs in with the
                invitee contact
            NotFoundError: If the claimed subject has no profile
            PersistenceError: If a write fails; no write of the claim persists
        """
        with logfire.span("finalize_claim.execute", token=request.token[:8] + "..."):
            self.credential_service.check_policy(request.new_credential)

            try:
                token = ClaimToken(root=request.token)
            except PydanticValidationError:
                return FinalizeClaimResponse.rejected(
                    RejectedClaim(outcome=ClaimOutcome.NOT_FOUND)
                )

            now = self.clock.now()
            async with self.transactions.begin():
                result = await self._finalize(
                    token, request.passcode, request.new_credential, now
                )

            if isinstance(result, RejectedClaim):
                logfire.info(
                    "Claim finalization rejected",
                    outcome=result.outcome.value,
                    status=result.status.value if result.status else None,
                )
                return FinalizeClaimResponse.rejected(result)

            logfire.info(
                "Claim finalized",
                claim_id=str(result.claim_id),
                identity_id=str(result.identity_id),
            )
            return FinalizeClaimResponse.finalized(result)

    async def _finalize(
        self, token: ClaimToken, passcode: str, new_credential: str, now: datetime
    ) -> FinalizedClaim | RejectedClaim:
        claim = await self.claim_service.get_by_token(token)
        check = self.claim_service.evaluate(claim, now)
        if claim is None or isinstance(check, RejectedClaim):
            return check

        if not claim.passcode_matches(passcode):
            logfire.warn("Incorrect passcode", claim_id=str(claim.id))
            return RejectedClaim(outcome=ClaimOutcome.INVALID, status=claim.status)

        profile = await self.profile_service.find_by_identity(claim.subject_id)
        if profile is None:
            # A concurrent finalization may have re-keyed the placeholder
            rejection = await self._recheck(token, now)
            if rejection is not None:
                return rejection
            raise NotFoundError("Profile", str(claim.subject_id))

        # A placeholder has no authentication identity; claiming mints one
        identity_id = (
            IdentityId(uuid4()) if profile.is_placeholder else claim.subject_id
        )
        await self.credential_service.ensure_contact_available(
            claim.invitee_contact, identity_id
        )

        accepted = await self.claim_service.accept(claim, identity_id, now)
        if accepted is None:
            return await self._recheck(token, now) or RejectedClaim(
                outcome=ClaimOutcome.ALREADY_USED, status=ClaimStatus.ACCEPTED
            )

        await self.credential_service.set_credential(
            identity_id, claim.invitee_contact, new_credential, now
        )
        await self.profile_service.mark_claimed(
            profile, identity_id, claim.invitee_contact, now
        )
        await self.supporter_service.transfer_to_claimed_identity(
            claim.subject_id, identity_id, claim.issuer_id
        )

        return FinalizedClaim(
            claim_id=claim.id,
            identity_id=identity_id,
            display_name=claim.display_name,
            contact=claim.invitee_contact,
            claimed_at=now,
        )

    async def _recheck(self, token: ClaimToken, now: datetime) -> RejectedClaim | None:
        """Re-read a claim whose pending snapshot may have gone stale."""
        current = await self.claim_service.get_by_token(token)
        check = self.claim_service.evaluate(current, now)
        return check if isinstance(check, RejectedClaim) else None
