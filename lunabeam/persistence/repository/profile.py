"""PostgreSQL implementation of Profile repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lunabeam.domain.model import Profile
from lunabeam.domain.repository import ProfileRepository
from lunabeam.domain.value import IdentityId
from lunabeam.persistence.mappers import profile_to_dict, row_to_profile
from lunabeam.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_identity(self, identity_id: IdentityId) -> Optional[Profile]:
        """Find a profile by its identity."""
        stmt = select(profiles_table).where(profiles_table.c.identity_id == identity_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update by profile ID)."""
        profile_dict = profile_to_dict(profile)

        exists = await self.session.execute(
            select(profiles_table.c.id).where(profiles_table.c.id == profile.id)
        )
        if exists.first() is not None:
            stmt = (
                update(profiles_table)
                .where(profiles_table.c.id == profile.id)
                .values(**profile_dict)
            )
        else:
            stmt = insert(profiles_table).values(**profile_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return profile
