"""PostgreSQL implementation of Supporter repository."""

from typing import Optional

from sqlalchemy import and_, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from lunabeam.domain.model import Supporter
from lunabeam.domain.repository import SupporterRepository
from lunabeam.domain.value import IdentityId
from lunabeam.persistence.mappers import row_to_supporter, supporter_to_dict
from lunabeam.persistence.tables import supporters_table


class PostgresSupporterRepository(SupporterRepository):
    """PostgreSQL implementation of SupporterRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_individual(self, individual_id: IdentityId) -> list[Supporter]:
        """Find all relationships of an individual."""
        stmt = (
            select(supporters_table)
            .where(supporters_table.c.individual_id == individual_id)
            .order_by(supporters_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_supporter(dict(row)) for row in result.mappings().all()]

    async def find_relationship(
        self, individual_id: IdentityId, supporter_id: IdentityId
    ) -> Optional[Supporter]:
        """Find the relationship between an individual and a supporter."""
        stmt = select(supporters_table).where(
            and_(
                supporters_table.c.individual_id == individual_id,
                supporters_table.c.supporter_id == supporter_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_supporter(dict(row)) if row else None

    async def save(self, supporter: Supporter) -> Supporter:
        """Save a relationship (upsert on the individual/supporter pair)."""
        values = supporter_to_dict(supporter)
        stmt = pg_insert(supporters_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            constraint="uq_supporter_relationship",
            set_={
                "role": stmt.excluded.role,
                "permission_level": stmt.excluded.permission_level,
                "is_provisioner": stmt.excluded.is_provisioner,
                "invited_by": stmt.excluded.invited_by,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return supporter

    async def repoint_individual(
        self, old_individual_id: IdentityId, new_individual_id: IdentityId
    ) -> int:
        """Move every relationship of one identity to another."""
        stmt = (
            update(supporters_table)
            .where(supporters_table.c.individual_id == old_individual_id)
            .values(individual_id=new_individual_id, updated_at=func.now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def clear_provisioner(
        self, individual_id: IdentityId, supporter_id: IdentityId
    ) -> None:
        """Clear the provisioner flag on one relationship."""
        stmt = (
            update(supporters_table)
            .where(
                and_(
                    supporters_table.c.individual_id == individual_id,
                    supporters_table.c.supporter_id == supporter_id,
                )
            )
            .values(is_provisioner=False, updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()
