"""Authentication credential entity."""

from datetime import datetime

from pydantic import Field

from lunabeam.domain.model.common import DomainModel
from lunabeam.domain.value import EmailAddress, IdentityId


class AuthCredential(DomainModel):
    """Password credential of an authentication identity.

    Only the salted hash is stored, never the password itself.
    """

    identity_id: IdentityId
    email: EmailAddress
    secret_hash: str
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
