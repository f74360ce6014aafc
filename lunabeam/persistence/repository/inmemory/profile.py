"""In-memory profile repository for testing."""

from typing import Optional

from lunabeam.domain.model.profile import Profile
from lunabeam.domain.repository.profile import ProfileRepository
from lunabeam.domain.value import IdentityId, ProfileId


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[ProfileId, Profile] = {}

    async def find_by_identity(self, identity_id: IdentityId) -> Optional[Profile]:
        """Find a profile by its identity."""
        for profile in self._profiles.values():
            if profile.identity_id == identity_id:
                return profile
        return None

    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update by profile ID)."""
        self._profiles[profile.id] = profile
        return profile

    def snapshot(self) -> dict[ProfileId, Profile]:
        return dict(self._profiles)

    def restore(self, snapshot: dict[ProfileId, Profile]) -> None:
        self._profiles = dict(snapshot)
