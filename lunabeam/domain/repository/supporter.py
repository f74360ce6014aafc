"""Supporter repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from lunabeam.domain.model.supporter import Supporter
from lunabeam.domain.value import IdentityId


class SupporterRepository(ABC):
    """Repository for supporter relationships."""

    @abstractmethod
    async def find_by_individual(self, individual_id: IdentityId) -> list[Supporter]:
        """Find all relationships of an individual.

        Args:
            individual_id: The individual's identity

        Returns:
            Supporter relationships of the individual
        """
        pass

    @abstractmethod
    async def find_relationship(
        self, individual_id: IdentityId, supporter_id: IdentityId
    ) -> Optional[Supporter]:
        """Find the relationship between an individual and a supporter.

        Args:
            individual_id: The individual's identity
            supporter_id: The supporter's identity

        Returns:
            The relationship if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, supporter: Supporter) -> Supporter:
        """Save a relationship (create or update).

        Args:
            supporter: The relationship to save

        Returns:
            The saved relationship
        """
        pass

    @abstractmethod
    async def repoint_individual(
        self, old_individual_id: IdentityId, new_individual_id: IdentityId
    ) -> int:
        """Move every relationship of one identity to another.

        Args:
            old_individual_id: Identity the rows currently reference
            new_individual_id: Identity the rows should reference

        Returns:
            Number of relationships moved
        """
        pass

    @abstractmethod
    async def clear_provisioner(
        self, individual_id: IdentityId, supporter_id: IdentityId
    ) -> None:
        """Clear the provisioner flag on one relationship.

        Args:
            individual_id: The individual's identity
            supporter_id: The provisioning supporter's identity
        """
        pass
