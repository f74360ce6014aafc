"""Get claims use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from lunabeam.application.usecase.base import BaseUseCase
from lunabeam.domain.service import ClaimService
from lunabeam.domain.value import ClaimStatus, IdentityId
from lunabeam.util.clock import Clock


class GetClaimsRequest(BaseModel):
    """Request to list claims issued by a supporter."""

    issuer_id: str
    status: ClaimStatus | None = None
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ClaimItem(BaseModel):
    """Claim item in response. Secrets are never listed."""

    claim_id: str
    subject_id: str
    display_name: str
    invitee_contact: str
    status: ClaimStatus
    expired: bool  # Past expiry, whatever the stored status
    issued_at: datetime
    expires_at: datetime
    claimed_at: datetime | None
    revoked_at: datetime | None


class GetClaimsResponse(BaseModel):
    """Response with a page of claims."""

    claims: list[ClaimItem]
    total: int


class GetClaimsUseCase(BaseUseCase):
    """Use case for listing the claims a supporter has issued."""

    def __init__(self, claim_service: ClaimService, clock: Clock) -> None:
        self.claim_service = claim_service
        self.clock = clock

    async def execute(self, request: GetClaimsRequest) -> GetClaimsResponse:
        """List claims issued by a supporter, newest first."""
        issuer_id = IdentityId(UUID(request.issuer_id))

        with logfire.span(
            "get_claims",
            issuer_id=str(issuer_id),
            status=request.status.value if request.status else None,
        ):
            claims = await self.claim_service.list_by_issuer(
                issuer_id, request.status, request.limit, request.offset
            )
            now = self.clock.now()

            items = [
                ClaimItem(
                    claim_id=str(claim.id),
                    subject_id=str(claim.subject_id),
                    display_name=claim.display_name,
                    invitee_contact=claim.invitee_contact.root,
                    status=claim.status,
                    expired=claim.is_expired(now),
                    issued_at=claim.issued_at,
                    expires_at=claim.expires_at,
                    claimed_at=claim.claimed_at,
                    revoked_at=claim.revoked_at,
                )
                for claim in claims
            ]
            return GetClaimsResponse(claims=items, total=len(items))
