"""Profile entity.

Each identity has one profile. Supporters can provision a profile for an
individual before the individual has an account of their own.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from lunabeam.domain.model.common import DomainModel
from lunabeam.domain.value import (
    AccountStatus,
    AuthenticationStatus,
    EmailAddress,
    IdentityId,
    ProfileId,
)


class Profile(DomainModel):
    """Profile of an individual or supporter, keyed by identity."""

    id: ProfileId
    identity_id: IdentityId
    first_name: str = Field(min_length=1, max_length=255)
    email: Optional[EmailAddress] = None
    account_status: AccountStatus = AccountStatus.ACTIVE
    authentication_status: AuthenticationStatus = AuthenticationStatus.ACTIVE
    password_set: bool = False
    onboarding_complete: bool = False
    created_by_supporter: Optional[IdentityId] = None
    claimed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_placeholder(self) -> bool:
        """Provisioned without an authentication identity of its own."""
        return self.authentication_status == AuthenticationStatus.PLACEHOLDER
