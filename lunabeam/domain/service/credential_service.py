"""Credential domain service.

Stores password credentials as bcrypt hashes.
"""

from datetime import datetime

import bcrypt
import logfire

from lunabeam.config import ClaimSettings
from lunabeam.domain.error import ContactInUseError, CredentialPolicyError
from lunabeam.domain.model import AuthCredential
from lunabeam.domain.repository import CredentialRepository
from lunabeam.domain.value import EmailAddress, IdentityId

from .base import Service

# bcrypt only reads the first 72 bytes of a password
MAX_SECRET_BYTES = 72


def hash_secret(secret: str) -> str:
    """Hash a secret with a fresh bcrypt salt."""
    return bcrypt.hashpw(secret.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_secret(secret: str, secret_hash: str) -> bool:
    """Check a secret against a hash produced by :func:`hash_secret`."""
    try:
        return bcrypt.checkpw(secret.encode("utf-8"), secret_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash or over-long secret
        return False


class CredentialService(Service):
    """Domain service for the authentication credential store."""

    def __init__(
        self,
        credential_repository: CredentialRepository,
        claim_settings: ClaimSettings,
    ) -> None:
        """Initialize credential service.

        Args:
            credential_repository: Credential repository
            claim_settings: Claim configuration (password policy)
        """
        self.credential_repository = credential_repository
        self.claim_settings = claim_settings

    def check_policy(self, secret: str) -> None:
        """Check a new password against the password policy.

        Raises:
            CredentialPolicyError: If the password is too weak
        """
        minimum = self.claim_settings.min_credential_length
        if len(secret) < minimum:
            raise CredentialPolicyError(
                f"Password must be at least {minimum} characters"
            )
        if not secret.strip():
            raise CredentialPolicyError("Password must not be blank")
        if len(secret.encode("utf-8")) > MAX_SECRET_BYTES:
            raise CredentialPolicyError(
                f"Password must be at most {MAX_SECRET_BYTES} bytes"
            )

    async def ensure_contact_available(
        self, email: EmailAddress, identity_id: IdentityId
    ) -> None:
        """Check no other identity signs in with an address.

        Raises:
            ContactInUseError: If the address belongs to another identity
        """
        owner = await self.credential_repository.find_by_email(email)
        if owner is not None and owner.identity_id != identity_id:
            logfire.warn(
                "Sign-in address already in use",
                identity_id=str(identity_id),
                owner_id=str(owner.identity_id),
            )
            raise ContactInUseError(email.masked())

    async def set_credential(
        self,
        identity_id: IdentityId,
        email: EmailAddress,
        secret: str,
        now: datetime,
    ) -> AuthCredential:
        """Create or replace the password of an identity.

        Args:
            identity_id: Identity receiving the credential
            email: Sign-in address of the identity
            secret: New password (already policy-checked)
            now: Time of the change

        Returns:
            Stored credential
        """
        with logfire.span(
            "credential_service.set_credential", identity_id=str(identity_id)
        ):
            existing = await self.credential_repository.find_by_identity(identity_id)
            credential = AuthCredential(
                identity_id=identity_id,
                email=email,
                secret_hash=hash_secret(secret),
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            saved = await self.credential_repository.save(credential)
            logfire.info(
                "Credential set",
                identity_id=str(identity_id),
                replaced=existing is not None,
            )
            return saved

    async def verify(self, identity_id: IdentityId, secret: str) -> bool:
        """Check a password against the stored credential of an identity."""
        credential = await self.credential_repository.find_by_identity(identity_id)
        if credential is None:
            return False
        return verify_secret(secret, credential.secret_hash)
