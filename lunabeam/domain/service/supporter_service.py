"""Supporter domain service."""

import logfire

from lunabeam.domain.model import Supporter
from lunabeam.domain.repository import SupporterRepository
from lunabeam.domain.value import IdentityId

from .base import Service


class SupporterService(Service):
    """Domain service for supporter relationships."""

    def __init__(self, supporter_repository: SupporterRepository) -> None:
        """Initialize supporter service.

        Args:
            supporter_repository: Supporter repository
        """
        self.supporter_repository = supporter_repository

    async def can_manage(
        self, individual_id: IdentityId, supporter_id: IdentityId
    ) -> bool:
        """Check whether a supporter may manage an individual's account.

        Only the provisioner or an admin-level supporter qualifies.
        """
        relationship = await self.supporter_repository.find_relationship(
            individual_id, supporter_id
        )
        allowed = bool(relationship and relationship.can_manage_account)
        logfire.info(
            "Account management check",
            individual_id=str(individual_id),
            supporter_id=str(supporter_id),
            allowed=allowed,
        )
        return allowed

    async def list_for_individual(self, individual_id: IdentityId) -> list[Supporter]:
        """List an individual's supporters."""
        return await self.supporter_repository.find_by_individual(individual_id)

    async def save(self, supporter: Supporter) -> Supporter:
        """Save a supporter relationship."""
        return await self.supporter_repository.save(supporter)

    async def transfer_to_claimed_identity(
        self,
        placeholder_id: IdentityId,
        identity_id: IdentityId,
        provisioner_id: IdentityId | None,
    ) -> int:
        """Point an individual's circle at the identity that claimed the account.

        Args:
            placeholder_id: Identity the relationships were created for
            identity_id: Identity that claimed the account
            provisioner_id: Supporter whose provisioner flag is cleared, if any

        Returns:
            Number of relationships repointed
        """
        with logfire.span(
            "supporter_service.transfer_to_claimed_identity",
            placeholder_id=str(placeholder_id),
            identity_id=str(identity_id),
        ):
            moved = 0
            if placeholder_id != identity_id:
                moved = await self.supporter_repository.repoint_individual(
                    placeholder_id, identity_id
                )
                logfire.info("Supporters repointed", count=moved)

            if provisioner_id is not None:
                await self.supporter_repository.clear_provisioner(
                    identity_id, provisioner_id
                )
                logfire.info(
                    "Provisioner flag cleared", provisioner_id=str(provisioner_id)
                )
            return moved
