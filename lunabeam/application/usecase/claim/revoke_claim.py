"""Revoke claim use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from lunabeam.application.usecase.base import BaseUseCase
from lunabeam.application.usecase.claim.access import ensure_can_manage
from lunabeam.domain.error import BusinessRuleViolationError
from lunabeam.domain.repository import TransactionManager
from lunabeam.domain.service import ClaimService, SupporterService
from lunabeam.domain.value import ClaimId, ClaimStatus, IdentityId
from lunabeam.util.clock import Clock


class RevokeClaimRequest(BaseModel):
    """Revoke claim request."""

    claim_id: str
    identity_id: str  # Supporter revoking the claim


class RevokeClaimResponse(BaseModel):
    """Revoke claim response."""

    claim_id: str
    status: ClaimStatus
    revoked_at: datetime


class RevokeClaimUseCase(BaseUseCase):
    """Use case for withdrawing a pending claim before it is used."""

    def __init__(
        self,
        claim_service: ClaimService,
        supporter_service: SupporterService,
        transactions: TransactionManager,
        clock: Clock,
    ) -> None:
        self.claim_service = claim_service
        self.supporter_service = supporter_service
        self.transactions = transactions
        self.clock = clock

    async def execute(self, request: RevokeClaimRequest) -> RevokeClaimResponse:
        """Revoke a claim.

        Raises:
            NotFoundError: If the claim does not exist
            NotAuthorizedError: If the identity does not manage the claim
            BusinessRuleViolationError: If the claim is no longer pending
        """
        claim_id = ClaimId(UUID(request.claim_id))
        identity_id = IdentityId(UUID(request.identity_id))

        with logfire.span(
            "revoke_claim", claim_id=str(claim_id), identity_id=str(identity_id)
        ):
            async with self.transactions.begin():
                claim = await self.claim_service.get_by_id(claim_id)
                await ensure_can_manage(claim, identity_id, self.supporter_service)

                revoked = await self.claim_service.revoke(claim, self.clock.now())
                if revoked is None or revoked.revoked_at is None:
                    raise BusinessRuleViolationError(
                        "Only pending claims can be revoked"
                    )

            return RevokeClaimResponse(
                claim_id=str(revoked.id),
                status=revoked.status,
                revoked_at=revoked.revoked_at,
            )
