"""Test configuration and helpers."""

from datetime import datetime, timezone
from uuid import uuid4

from lunabeam.domain.model import Profile, Supporter
from lunabeam.domain.value import (
    AccountStatus,
    AuthenticationStatus,
    EmailAddress,
    IdentityId,
    PermissionLevel,
    ProfileId,
    SupporterId,
    SupporterRole,
)

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_profile(
    identity_id: IdentityId | None = None,
    first_name: str = "Alice",
    authentication_status: AuthenticationStatus = AuthenticationStatus.PENDING,
    created_by: IdentityId | None = None,
    email: str | None = None,
) -> Profile:
    """Build a profile.

    PLACEHOLDER profiles mimic accounts a supporter provisioned without a login.
    """
    placeholder = authentication_status == AuthenticationStatus.PLACEHOLDER
    return Profile(
        id=ProfileId(uuid4()),
        identity_id=identity_id or IdentityId(uuid4()),
        first_name=first_name,
        email=EmailAddress(root=email) if email else None,
        account_status=(
            AccountStatus.PENDING_USER_CONSENT if placeholder else AccountStatus.ACTIVE
        ),
        authentication_status=authentication_status,
        created_by_supporter=created_by,
        created_at=NOW,
        updated_at=NOW,
    )


def make_supporter(
    individual_id: IdentityId,
    supporter_id: IdentityId,
    is_provisioner: bool = False,
    permission_level: PermissionLevel = PermissionLevel.VIEWER,
) -> Supporter:
    """Build a supporter relationship."""
    return Supporter(
        id=SupporterId(uuid4()),
        individual_id=individual_id,
        supporter_id=supporter_id,
        role=SupporterRole.SUPPORTER,
        permission_level=permission_level,
        is_provisioner=is_provisioner,
        created_at=NOW,
        updated_at=NOW,
    )


async def seed_account(
    env,
    authentication_status: AuthenticationStatus = AuthenticationStatus.PLACEHOLDER,
    permission_level: PermissionLevel = PermissionLevel.VIEWER,
    is_provisioner: bool = True,
) -> tuple[IdentityId, IdentityId]:
    """Seed an individual's profile and one supporter who manages it.

    Args:
        env: Request container from create_env_fixture
        authentication_status: Status of the individual's profile
        permission_level: Permission of the supporter
        is_provisioner: Whether the supporter provisioned the account

    Returns:
        (subject_id, issuer_id)
    """
    from lunabeam.domain.repository import ProfileRepository, SupporterRepository

    profiles = await env.get(ProfileRepository)
    supporters = await env.get(SupporterRepository)

    issuer_id = IdentityId(uuid4())
    await profiles.save(make_profile(issuer_id, first_name="Sam"))

    subject = make_profile(
        first_name="Alice",
        authentication_status=authentication_status,
        created_by=issuer_id,
    )
    await profiles.save(subject)
    await supporters.save(
        make_supporter(
            subject.identity_id,
            issuer_id,
            is_provisioner=is_provisioner,
            permission_level=permission_level,
        )
    )
    return subject.identity_id, issuer_id
