"""Profile domain service."""

from datetime import datetime

import logfire

from lunabeam.domain.error import NotFoundError
from lunabeam.domain.model import Profile
from lunabeam.domain.repository import ProfileRepository
from lunabeam.domain.value import (
    AccountStatus,
    AuthenticationStatus,
    EmailAddress,
    IdentityId,
)

from .base import Service


class ProfileService(Service):
    """Domain service for profile operations."""

    def __init__(self, profile_repository: ProfileRepository) -> None:
        """Initialize profile service.

        Args:
            profile_repository: Profile repository
        """
        self.profile_repository = profile_repository

    async def find_by_identity(self, identity_id: IdentityId) -> Profile | None:
        """Find a profile, returning None if it does not exist."""
        return await self.profile_repository.find_by_identity(identity_id)

    async def get_by_identity(self, identity_id: IdentityId) -> Profile:
        """Get profile by identity.

        Args:
            identity_id: Identity ID

        Returns:
            Profile entity

        Raises:
            NotFoundError: If profile not found
        """
        with logfire.span(
            "profile_service.get_by_identity", identity_id=str(identity_id)
        ):
            profile = await self.profile_repository.find_by_identity(identity_id)
            if not profile:
                logfire.warn("Profile not found", identity_id=str(identity_id))
                raise NotFoundError("Profile", str(identity_id))
            return profile

    async def save(self, profile: Profile) -> Profile:
        """Save a profile."""
        return await self.profile_repository.save(profile)

    async def mark_claimed(
        self,
        profile: Profile,
        identity_id: IdentityId,
        email: EmailAddress,
        now: datetime,
    ) -> Profile:
        """Record that the individual now owns and can sign in to the account.

        A placeholder profile is re-keyed to the newly authenticated identity.

        Args:
            profile: Profile of the claimed subject
            identity_id: Authenticated identity now owning the profile
            email: Contact the claim was issued to
            now: Claim time

        Returns:
            Updated profile
        """
        with logfire.span(
            "profile_service.mark_claimed",
            profile_id=str(profile.id),
            identity_id=str(identity_id),
            rekeyed=profile.identity_id != identity_id,
        ):
            claimed = profile.model_copy(
                update={
                    "identity_id": identity_id,
                    "email": email,
                    "authentication_status": AuthenticationStatus.ACTIVE,
                    "password_set": True,
                    "account_status": AccountStatus.ACTIVE,
                    "onboarding_complete": True,  # Supporter already set it up
                    "claimed_at": now,
                    "updated_at": now,
                }
            )
            saved = await self.profile_repository.save(claimed)
            logfire.info("Profile claimed", profile_id=str(profile.id))
            return saved
