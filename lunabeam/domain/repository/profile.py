"""Profile repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from lunabeam.domain.model.profile import Profile
from lunabeam.domain.value import IdentityId


class ProfileRepository(ABC):
    """Repository for Profile entity."""

    @abstractmethod
    async def find_by_identity(self, identity_id: IdentityId) -> Optional[Profile]:
        """Find a profile by its identity.

        Args:
            identity_id: The identity the profile belongs to

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update by profile ID).

        Saving a profile with a different identity_id re-keys it.

        Args:
            profile: The profile to save

        Returns:
            The saved profile
        """
        pass
