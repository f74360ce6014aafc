"""Credential repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from lunabeam.domain.model.credential import AuthCredential
from lunabeam.domain.value import EmailAddress, IdentityId


class CredentialRepository(ABC):
    """Repository for authentication credentials."""

    @abstractmethod
    async def find_by_identity(
        self, identity_id: IdentityId
    ) -> Optional[AuthCredential]:
        """Find the credential of an identity.

        Args:
            identity_id: The identity

        Returns:
            The credential if one is set, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: EmailAddress) -> Optional[AuthCredential]:
        """Find the credential registered under a sign-in address.

        Args:
            email: The sign-in address

        Returns:
            The credential if the address is taken, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, credential: AuthCredential) -> AuthCredential:
        """Create or replace the credential of an identity.

        Args:
            credential: The credential to store

        Returns:
            The stored credential

        Raises:
            ContactInUseError: If another identity already uses the address
        """
        pass
