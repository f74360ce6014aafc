"""Integration tests for ClaimRepository.

Require PostgreSQL at DATABASE__URL with migrations applied.
"""

import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from lunabeam.domain.error import DuplicateIdentityError
from lunabeam.domain.model import Claim
from lunabeam.domain.repository import ClaimRepository
from lunabeam.domain.value import (
    ClaimId,
    ClaimStatus,
    ClaimToken,
    EmailAddress,
    IdentityId,
    Passcode,
)
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ, reason="DATABASE__URL not set"
)

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


def make_claim(subject_id: IdentityId, now: datetime) -> Claim:
    return Claim(
        id=ClaimId(uuid4()),
        token=ClaimToken(root=f"it-{uuid4().hex}"),
        passcode=Passcode(root="K7P2QX"),
        subject_id=subject_id,
        invitee_contact=EmailAddress(root="alice@example.com"),
        display_name="Alice",
        issued_at=now,
        expires_at=now + timedelta(days=1),
    )


class TestClaimRepositoryIntegration:
    """Integration tests for PostgresClaimRepository."""

    @pytest.mark.asyncio
    async def test_find_by_token_round_trip(self, integration_env):
        """Test a stored claim is found by its token value object."""
        # Arrange
        repository = await integration_env.get(ClaimRepository)
        now = datetime.now(timezone.utc)
        claim = await repository.add(make_claim(IdentityId(uuid4()), now))

        # Act
        found = await repository.find_by_token(claim.token)

        # Assert
        assert found is not None
        assert found.id == claim.id
        assert found.passcode == claim.passcode
        assert found.status == ClaimStatus.PENDING

    @pytest.mark.asyncio
    async def test_conditional_write_succeeds_once(self, integration_env):
        """Test only the first pending -> accepted write matches a row."""
        # Arrange
        repository = await integration_env.get(ClaimRepository)
        now = datetime.now(timezone.utc)
        claim = await repository.add(make_claim(IdentityId(uuid4()), now))
        accepted = claim.accept(claim.subject_id, now)

        # Act
        first = await repository.update_if_pending(accepted, unexpired_at=now)
        second = await repository.update_if_pending(accepted, unexpired_at=now)

        # Assert
        assert first is True
        assert second is False
        stored = await repository.find_by_id(claim.id)
        assert stored.status == ClaimStatus.ACCEPTED
        assert stored.claimed_identity_id == claim.subject_id

    @pytest.mark.asyncio
    async def test_conditional_write_respects_expiry(self, integration_env):
        """Test an expired claim cannot be accepted."""
        repository = await integration_env.get(ClaimRepository)
        now = datetime.now(timezone.utc)
        claim = await repository.add(make_claim(IdentityId(uuid4()), now))
        later = claim.expires_at + timedelta(seconds=1)

        won = await repository.update_if_pending(
            claim.accept(claim.subject_id, later), unexpired_at=later
        )

        assert won is False

    @pytest.mark.asyncio
    async def test_one_pending_claim_per_subject(self, integration_env):
        """Test the partial unique index rejects a second pending claim."""
        repository = await integration_env.get(ClaimRepository)
        now = datetime.now(timezone.utc)
        subject_id = IdentityId(uuid4())
        await repository.add(make_claim(subject_id, now))

        with pytest.raises(DuplicateIdentityError):
            await repository.add(make_claim(subject_id, now))

        pending = await repository.find_pending_by_subject(subject_id)
        assert len(pending) == 1
