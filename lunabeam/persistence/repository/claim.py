"""PostgreSQL implementation of Claim repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lunabeam.domain.error import DuplicateIdentityError
from lunabeam.domain.model import Claim
from lunabeam.domain.repository import ClaimRepository
from lunabeam.domain.value import ClaimId, ClaimStatus, ClaimToken, IdentityId
from lunabeam.persistence.mappers import claim_to_dict, row_to_claim
from lunabeam.persistence.tables import account_claims_table


class PostgresClaimRepository(ClaimRepository):
    """PostgreSQL implementation of ClaimRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, claim_id: ClaimId) -> Optional[Claim]:
        """Find a claim by ID."""
        stmt = select(account_claims_table).where(account_claims_table.c.id == claim_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_claim(dict(row)) if row else None

    async def find_by_token(self, token: ClaimToken) -> Optional[Claim]:
        """Find a claim by its token."""
        stmt = select(account_claims_table).where(
            account_claims_table.c.token == token.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_claim(dict(row)) if row else None

    async def find_pending_by_subject(self, subject_id: IdentityId) -> list[Claim]:
        """Find pending claims for a subject."""
        stmt = select(account_claims_table).where(
            and_(
                account_claims_table.c.subject_id == subject_id,
                account_claims_table.c.status == ClaimStatus.PENDING.value,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_claim(dict(row)) for row in result.mappings().all()]

    async def add(self, claim: Claim) -> Claim:
        """Insert a new claim.

        Raises:
            DuplicateIdentityError: If the subject already has a pending claim
        """
        stmt = insert(account_claims_table).values(**claim_to_dict(claim))
        try:
            # Savepoint so a unique violation leaves the outer transaction usable
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise DuplicateIdentityError(str(claim.subject_id)) from e
        return claim

    async def update_if_pending(
        self, claim: Claim, unexpired_at: datetime | None = None
    ) -> bool:
        """Write lifecycle fields, guarded by status and optionally expiry.

        A single UPDATE ... WHERE status = 'pending', so concurrent callers
        are serialised by the row lock and only one sees a row count of 1.
        """
        conditions = [
            account_claims_table.c.id == claim.id,
            account_claims_table.c.status == ClaimStatus.PENDING.value,
        ]
        if unexpired_at is not None:
            conditions.append(account_claims_table.c.expires_at > unexpired_at)

        stmt = (
            update(account_claims_table)
            .where(and_(*conditions))
            .values(
                status=claim.status.value,
                claimed_at=claim.claimed_at,
                claimed_identity_id=claim.claimed_identity_id,
                revoked_at=claim.revoked_at,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def find_by_issuer(
        self,
        issuer_id: IdentityId,
        status: Optional[ClaimStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Claim]:
        """Find claims by issuer with pagination, newest first."""
        stmt = select(account_claims_table).where(
            account_claims_table.c.issuer_id == issuer_id
        )

        if status:
            stmt = stmt.where(account_claims_table.c.status == status.value)

        stmt = (
            stmt.order_by(account_claims_table.c.issued_at.desc())
            .limit(limit)
            .offset(offset)
        )

        result = await self.session.execute(stmt)
        return [row_to_claim(dict(row)) for row in result.mappings().all()]
