"""Supporter relationship entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from lunabeam.domain.model.common import DomainModel
from lunabeam.domain.value import (
    IdentityId,
    PermissionLevel,
    SupporterId,
    SupporterRole,
)


class Supporter(DomainModel):
    """Membership of a supporter in an individual's circle.

    Business rules:
    - One relationship per (individual, supporter) pair
    - The provisioner created the individual's account and keeps that flag
      until the individual claims it
    """

    id: SupporterId
    individual_id: IdentityId
    supporter_id: IdentityId
    role: SupporterRole = SupporterRole.SUPPORTER
    permission_level: PermissionLevel = PermissionLevel.VIEWER
    is_provisioner: bool = False
    invited_by: Optional[IdentityId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def can_manage_account(self) -> bool:
        """Whether this supporter may issue claims for the individual."""
        return self.is_provisioner or self.permission_level == PermissionLevel.ADMIN
