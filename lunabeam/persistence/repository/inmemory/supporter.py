"""In-memory supporter repository for testing."""

from datetime import datetime, timezone
from typing import Optional

from lunabeam.domain.model.supporter import Supporter
from lunabeam.domain.repository.supporter import SupporterRepository
from lunabeam.domain.value import IdentityId


class InMemorySupporterRepository(SupporterRepository):
    """In-memory implementation of SupporterRepository for testing."""

    def __init__(self) -> None:
        self._supporters: list[Supporter] = []

    async def find_by_individual(self, individual_id: IdentityId) -> list[Supporter]:
        """Find all relationships of an individual."""
        return [s for s in self._supporters if s.individual_id == individual_id]

    async def find_relationship(
        self, individual_id: IdentityId, supporter_id: IdentityId
    ) -> Optional[Supporter]:
        """Find the relationship between an individual and a supporter."""
        for supporter in self._supporters:
            if (
                supporter.individual_id == individual_id
                and supporter.supporter_id == supporter_id
            ):
                return supporter
        return None

    async def save(self, supporter: Supporter) -> Supporter:
        """Save a relationship (upsert on the individual/supporter pair)."""
        for i, existing in enumerate(self._supporters):
            if (
                existing.individual_id == supporter.individual_id
                and existing.supporter_id == supporter.supporter_id
            ):
                self._supporters[i] = supporter
                return supporter
        self._supporters.append(supporter)
        return supporter

    async def repoint_individual(
        self, old_individual_id: IdentityId, new_individual_id: IdentityId
    ) -> int:
        """Move every relationship of one identity to another."""
        moved = 0
        now = datetime.now(timezone.utc)
        for i, existing in enumerate(self._supporters):
            if existing.individual_id == old_individual_id:
                self._supporters[i] = existing.model_copy(
                    update={"individual_id": new_individual_id, "updated_at": now}
                )
                moved += 1
        return moved

    async def clear_provisioner(
        self, individual_id: IdentityId, supporter_id: IdentityId
    ) -> None:
        """Clear the provisioner flag on one relationship."""
        for i, existing in enumerate(self._supporters):
            if (
                existing.individual_id == individual_id
                and existing.supporter_id == supporter_id
            ):
                self._supporters[i] = existing.model_copy(
                    update={
                        "is_provisioner": False,
                        "updated_at": datetime.now(timezone.utc),
                    }
                )

    def snapshot(self) -> list[Supporter]:
        return list(self._supporters)

    def restore(self, snapshot: list[Supporter]) -> None:
        self._supporters = list(snapshot)
