"""Resend claim invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from lunabeam.application.usecase.base import BaseUseCase
from lunabeam.application.usecase.claim.access import ensure_can_manage
from lunabeam.domain.error import BusinessRuleViolationError
from lunabeam.domain.service import (
    ClaimService,
    InvitationService,
    ProfileService,
    SupporterService,
)
from lunabeam.domain.value import ClaimId, IdentityId
from lunabeam.util.clock import Clock


class ResendInvitationRequest(BaseModel):
    """Resend invitation request."""

    claim_id: str
    identity_id: str  # Supporter asking for the resend
    message: str | None = Field(default=None, max_length=1000)


class ResendInvitationResponse(BaseModel):
    """Resend invitation response."""

    claim_id: str
    delivered: bool
    delivery_error: str | None = None


class ResendInvitationUseCase(BaseUseCase):
    """Use case for sending the link of a live claim again.

    The claim, its token and its passcode are unchanged.
    """

    def __init__(
        self,
        claim_service: ClaimService,
        profile_service: ProfileService,
        supporter_service: SupporterService,
        invitation_service: InvitationService,
        clock: Clock,
    ) -> None:
        self.claim_service = claim_service
        self.profile_service = profile_service
        self.supporter_service = supporter_service
        self.invitation_service = invitation_service
        self.clock = clock

    async def execute(
        self, request: ResendInvitationRequest
    ) -> ResendInvitationResponse:
        """Resend the invitation of a claim.

        Raises:
            NotFoundError: If the claim does not exist
            NotAuthorizedError: If the identity does not manage the claim
            BusinessRuleViolationError: If the claim can no longer be used
        """
        claim_id = ClaimId(UUID(request.claim_id))
        identity_id = IdentityId(UUID(request.identity_id))

        with logfire.span(
            "resend_invitation", claim_id=str(claim_id), identity_id=str(identity_id)
        ):
            claim = await self.claim_service.get_by_id(claim_id)
            await ensure_can_manage(claim, identity_id, self.supporter_service)

            if not claim.is_usable(self.clock.now()):
                raise BusinessRuleViolationError(
                    "Only pending, unexpired claims can be resent"
                )

            issuer_name = None
            if claim.issuer_id is not None:
                issuer = await self.profile_service.find_by_identity(claim.issuer_id)
                issuer_name = issuer.first_name if issuer else None

            report = await self.invitation_service.send_invitation(
                claim, issuer_name, request.message
            )
            return ResendInvitationResponse(
                claim_id=str(claim.id),
                delivered=report.delivered,
                delivery_error=report.error,
            )
