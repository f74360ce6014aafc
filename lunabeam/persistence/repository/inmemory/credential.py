"""In-memory credential repository for testing."""

from typing import Optional

from lunabeam.domain.error import ContactInUseError
from lunabeam.domain.model.credential import AuthCredential
from lunabeam.domain.repository.credential import CredentialRepository
from lunabeam.domain.value import EmailAddress, IdentityId


class InMemoryCredentialRepository(CredentialRepository):
    """In-memory implementation of CredentialRepository for testing."""

    def __init__(self) -> None:
        self._credentials: dict[IdentityId, AuthCredential] = {}

    async def find_by_identity(
        self, identity_id: IdentityId
    ) -> Optional[AuthCredential]:
        """Find the credential of an identity."""
        return self._credentials.get(identity_id)

    async def find_by_email(self, email: EmailAddress) -> Optional[AuthCredential]:
        """Find the credential registered under a sign-in address."""
        for credential in self._credentials.values():
            if credential.email == email:
                return credential
        return None

    async def save(self, credential: AuthCredential) -> AuthCredential:
        """Create or replace the credential of an identity."""
        # Mirrors the unique index on auth_credentials.email
        owner = await self.find_by_email(credential.email)
        if owner is not None and owner.identity_id != credential.identity_id:
            raise ContactInUseError(credential.email.root)
        self._credentials[credential.identity_id] = credential
        return credential

    def snapshot(self) -> dict[IdentityId, AuthCredential]:
        return dict(self._credentials)

    def restore(self, snapshot: dict[IdentityId, AuthCredential]) -> None:
        self._credentials = dict(snapshot)
