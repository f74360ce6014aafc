"""Validate claim use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from lunabeam.application.usecase.base import BaseUseCase
from lunabeam.domain.service import ClaimService
from lunabeam.domain.value import (
    ClaimOutcome,
    ClaimStatus,
    ClaimToken,
    RejectedClaim,
    ValidClaim,
)
from lunabeam.util.clock import Clock


class ValidateClaimRequest(BaseModel):
    """Validate claim request."""

    token: str
    invitee_contact: str | None = None


class ValidateClaimResponse(BaseModel):
    """Validate claim response.

    Never includes the passcode or the full contact.
    """

    valid: bool
    outcome: ClaimOutcome
    status: ClaimStatus | None = None
    claim_id: str | None = None
    display_name: str | None = None
    masked_contact: str | None = None
    expires_at: datetime | None = None
    message: str


class ValidateClaimUseCase(BaseUseCase):
    """Use case for checking a claim link before showing the claim form.

    Read-only; an expired claim is reported as expired without being
    written back.
    """

    def __init__(self, claim_service: ClaimService, clock: Clock) -> None:
        """Initialize validate claim use case.

        Args:
            claim_service: Claim domain service
            clock: Time source
        """
        self.claim_service = claim_service
        self.clock = clock

    async def execute(self, request: ValidateClaimRequest) -> ValidateClaimResponse:
        """Validate a claim token.

        Args:
            request: Validation request with token and optional contact

        Returns:
            Validation response with a safe preview or the rejection reason
        """
        with logfire.span("validate_claim.execute", token=request.token[:8] + "..."):
            try:
                token = ClaimToken(root=request.token)
            except PydanticValidationError:
                result = RejectedClaim(outcome=ClaimOutcome.NOT_FOUND)
            else:
                claim = await self.claim_service.get_by_token(token)
                result = self.claim_service.evaluate(
                    claim, self.clock.now(), request.invitee_contact
                )

            if isinstance(result, ValidClaim):
                preview = result.preview
                logfire.info("Valid claim found", claim_id=str(preview.claim_id))
                return ValidateClaimResponse(
                    valid=True,
                    outcome=result.outcome,
                    status=ClaimStatus.PENDING,
                    claim_id=str(preview.claim_id),
                    display_name=preview.display_name,
                    masked_contact=preview.masked_contact,
                    expires_at=preview.expires_at,
                    message="Valid claim",
                )

            logfire.info(
                "Claim rejected",
                outcome=result.outcome.value,
                status=result.status.value if result.status else None,
            )
            return ValidateClaimResponse(
                valid=False,
                outcome=result.outcome,
                status=result.status,
                message=result.message,
            )
