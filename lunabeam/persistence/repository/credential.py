"""PostgreSQL implementation of Credential repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lunabeam.domain.error import ContactInUseError
from lunabeam.domain.model import AuthCredential
from lunabeam.domain.repository import CredentialRepository
from lunabeam.domain.value import EmailAddress, IdentityId
from lunabeam.persistence.mappers import credential_to_dict, row_to_credential
from lunabeam.persistence.tables import auth_credentials_table

EMAIL_INDEX = "idx_auth_credentials_email"


class PostgresCredentialRepository(CredentialRepository):
    """PostgreSQL implementation of CredentialRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_identity(
        self, identity_id: IdentityId
    ) -> Optional[AuthCredential]:
        """Find the credential of an identity."""
        stmt = select(auth_credentials_table).where(
            auth_credentials_table.c.identity_id == identity_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_credential(dict(row)) if row else None

    async def find_by_email(self, email: EmailAddress) -> Optional[AuthCredential]:
        """Find the credential registered under a sign-in address."""
        stmt = select(auth_credentials_table).where(
            auth_credentials_table.c.email == email.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_credential(dict(row)) if row else None

    async def save(self, credential: AuthCredential) -> AuthCredential:
        """Create or replace the credential of an identity."""
        stmt = pg_insert(auth_credentials_table).values(
            **credential_to_dict(credential)
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[auth_credentials_table.c.identity_id],
            set_={
                "email": stmt.excluded.email,
                "secret_hash": stmt.excluded.secret_hash,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        try:
            # Savepoint so a unique violation leaves the outer transaction usable
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            if EMAIL_INDEX in str(e.orig):
                raise ContactInUseError(credential.email.root) from e
            raise
        return credential
