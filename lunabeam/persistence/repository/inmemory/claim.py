"""In-memory claim repository for testing."""

from datetime import datetime
from typing import Optional

from lunabeam.domain.error import DuplicateIdentityError
from lunabeam.domain.model.claim import Claim
from lunabeam.domain.repository.claim import ClaimRepository
from lunabeam.domain.value import ClaimId, ClaimStatus, ClaimToken, IdentityId


class InMemoryClaimRepository(ClaimRepository):
    """In-memory implementation of ClaimRepository for testing."""

    def __init__(self) -> None:
        self._claims: dict[ClaimId, Claim] = {}

    async def find_by_id(self, claim_id: ClaimId) -> Optional[Claim]:
        """Find a claim by ID."""
        return self._claims.get(claim_id)

    async def find_by_token(self, token: ClaimToken) -> Optional[Claim]:
        """Find a claim by its token."""
        for claim in self._claims.values():
            if claim.token == token:
                return claim
        return None

    async def find_pending_by_subject(self, subject_id: IdentityId) -> list[Claim]:
        """Find pending claims for a subject."""
        return [
            claim
            for claim in self._claims.values()
            if claim.subject_id == subject_id and claim.status == ClaimStatus.PENDING
        ]

    async def add(self, claim: Claim) -> Claim:
        """Insert a new claim.

        Raises:
            DuplicateIdentityError: If the subject already has a pending claim
        """
        if claim.status == ClaimStatus.PENDING and await self.find_pending_by_subject(
            claim.subject_id
        ):
            raise DuplicateIdentityError(str(claim.subject_id))
        self._claims[claim.id] = claim
        return claim

    async def update_if_pending(
        self, claim: Claim, unexpired_at: datetime | None = None
    ) -> bool:
        """Write a claim if the stored one is still pending."""
        stored = self._claims.get(claim.id)
        if stored is None or stored.status != ClaimStatus.PENDING:
            return False
        if unexpired_at is not None and stored.expires_at <= unexpired_at:
            return False
        self._claims[claim.id] = claim
        return True

    async def find_by_issuer(
        self,
        issuer_id: IdentityId,
        status: Optional[ClaimStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Claim]:
        """Find claims by issuer, newest first."""
        claims = [
            claim
            for claim in self._claims.values()
            if claim.issuer_id == issuer_id and (status is None or claim.status == status)
        ]
        claims.sort(key=lambda c: c.issued_at, reverse=True)
        return claims[offset : offset + limit]

    def snapshot(self) -> dict[ClaimId, Claim]:
        return dict(self._claims)

    def restore(self, snapshot: dict[ClaimId, Claim]) -> None:
        self._claims = dict(snapshot)
