"""Tests for claim service."""

from datetime import timedelta
from uuid import uuid4

import pytest

from lunabeam.config import ClaimSettings
from lunabeam.domain.error import DuplicateIdentityError
from lunabeam.domain.service import ClaimService
from lunabeam.domain.value import (
    ClaimOutcome,
    ClaimStatus,
    EmailAddress,
    IdentityId,
    RejectedClaim,
    ValidClaim,
)
from lunabeam.persistence.repository.inmemory import InMemoryClaimRepository
from tests.conftest import NOW
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

ALICE = EmailAddress(root="alice@example.com")


async def issue(service: ClaimService, subject_id: IdentityId, now=NOW, **kwargs):
    return await service.issue(
        subject_id=subject_id,
        issuer_id=kwargs.get("issuer_id"),
        invitee_contact=kwargs.get("invitee_contact", ALICE),
        display_name=kwargs.get("display_name", "Alice"),
        ttl=kwargs.get("ttl", timedelta(days=1)),
        now=now,
    )


class TestIssue:
    """Tests for ClaimService.issue."""

    @pytest.mark.asyncio
    async def test_issue_creates_pending_claim_with_two_secrets(self, unit_env):
        """Test issued claim carries distinct token and passcode."""
        # Arrange
        service = await unit_env.get(ClaimService)
        subject_id = IdentityId(uuid4())

        # Act
        claim = await issue(service, subject_id)

        # Assert
        assert claim.status == ClaimStatus.PENDING
        assert claim.expires_at == NOW + timedelta(days=1)
        assert len(claim.passcode.root) == 6
        assert claim.passcode.root.isupper() or claim.passcode.root.isdigit()
        assert len(claim.token.root) >= 32
        assert claim.token.root != claim.passcode.root

    @pytest.mark.asyncio
    async def test_tokens_are_unique(self, unit_env):
        """Test each claim gets a fresh token and passcode."""
        service = await unit_env.get(ClaimService)
        first = await issue(service, IdentityId(uuid4()))
        second = await issue(service, IdentityId(uuid4()))
        assert first.token != second.token

    @pytest.mark.asyncio
    async def test_reissue_revokes_live_claim(self, unit_env):
        """Test re-issuing revokes the earlier pending claim by default."""
        # Arrange
        service = await unit_env.get(ClaimService)
        repository = await unit_env.get(InMemoryClaimRepository)
        subject_id = IdentityId(uuid4())
        first = await issue(service, subject_id)

        # Act
        second = await issue(service, subject_id, now=NOW + timedelta(hours=1))

        # Assert
        stored_first = await repository.find_by_id(first.id)
        assert stored_first.status == ClaimStatus.REVOKED
        assert stored_first.revoked_at == NOW + timedelta(hours=1)
        assert await repository.find_pending_by_subject(subject_id) == [second]

    @pytest.mark.asyncio
    async def test_reissue_closes_expired_claim_as_expired(self, unit_env):
        """Test an expired predecessor is marked expired, not revoked."""
        service = await unit_env.get(ClaimService)
        repository = await unit_env.get(InMemoryClaimRepository)
        subject_id = IdentityId(uuid4())
        first = await issue(service, subject_id)

        await issue(service, subject_id, now=NOW + timedelta(days=2))

        stored_first = await repository.find_by_id(first.id)
        assert stored_first.status == ClaimStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_reject_policy_refuses_second_live_claim(self):
        """Test the reject policy keeps the live claim and raises."""
        # Arrange
        repository = InMemoryClaimRepository()
        service = ClaimService(repository, ClaimSettings(reissue_policy="reject"))
        subject_id = IdentityId(uuid4())
        first = await issue(service, subject_id)

        # Act & Assert
        with pytest.raises(DuplicateIdentityError):
            await issue(service, subject_id)
        assert await repository.find_pending_by_subject(subject_id) == [first]

    @pytest.mark.asyncio
    async def test_passcode_length_follows_settings(self):
        """Test passcode length is configurable."""
        service = ClaimService(
            InMemoryClaimRepository(), ClaimSettings(passcode_length=8)
        )
        assert len(service.generate_passcode().root) == 8


class TestEvaluate:
    """Tests for ClaimService.evaluate."""

    @pytest.mark.asyncio
    async def test_outcomes(self, unit_env):
        """Test each stored state maps to its outcome."""
        # Arrange
        service = await unit_env.get(ClaimService)
        claim = await issue(service, IdentityId(uuid4()))

        # Act & Assert
        valid = service.evaluate(claim, NOW)
        assert isinstance(valid, ValidClaim)
        assert valid.preview.masked_contact == "a***@example.com"
        assert valid.preview.display_name == "Alice"

        assert service.evaluate(None, NOW) == RejectedClaim(
            outcome=ClaimOutcome.NOT_FOUND
        )
        assert (
            service.evaluate(claim, claim.expires_at).outcome == ClaimOutcome.EXPIRED
        )
        accepted = claim.accept(IdentityId(uuid4()), NOW)
        assert service.evaluate(accepted, NOW).outcome == ClaimOutcome.ALREADY_USED

    @pytest.mark.asyncio
    async def test_terminal_status_reported_before_expiry(self, unit_env):
        """Test a revoked claim past expiry still reports as revoked."""
        service = await unit_env.get(ClaimService)
        claim = await issue(service, IdentityId(uuid4()))

        result = service.evaluate(claim.revoke(NOW), NOW + timedelta(days=3))

        assert result.outcome == ClaimOutcome.ALREADY_USED
        assert result.status == ClaimStatus.REVOKED
        assert result.message == "This invitation has been revoked"

    @pytest.mark.asyncio
    async def test_contact_mismatch_is_not_found(self, unit_env):
        """Test a contact check does not reveal the claim exists."""
        service = await unit_env.get(ClaimService)
        claim = await issue(service, IdentityId(uuid4()))

        assert isinstance(service.evaluate(claim, NOW, "ALICE@example.com"), ValidClaim)
        result = service.evaluate(claim, NOW, "mallory@example.com")
        assert result.outcome == ClaimOutcome.NOT_FOUND


class TestTransitions:
    """Tests for accept and revoke."""

    @pytest.mark.asyncio
    async def test_accept_only_once(self, unit_env):
        """Test the second accept of the same pending snapshot loses."""
        # Arrange
        service = await unit_env.get(ClaimService)
        claim = await issue(service, IdentityId(uuid4()))

        # Act
        first = await service.accept(claim, IdentityId(uuid4()), NOW)
        second = await service.accept(claim, IdentityId(uuid4()), NOW)

        # Assert
        assert first is not None
        assert first.status == ClaimStatus.ACCEPTED
        assert second is None

    @pytest.mark.asyncio
    async def test_accept_after_expiry_fails(self, unit_env):
        """Test the conditional write also guards expiry."""
        service = await unit_env.get(ClaimService)
        repository = await unit_env.get(InMemoryClaimRepository)
        claim = await issue(service, IdentityId(uuid4()))

        result = await service.accept(claim, claim.subject_id, claim.expires_at)

        assert result is None
        assert (await repository.find_by_id(claim.id)).status == ClaimStatus.PENDING

    @pytest.mark.asyncio
    async def test_revoke_non_pending_returns_none(self, unit_env):
        """Test revoking an accepted claim is refused."""
        service = await unit_env.get(ClaimService)
        claim = await issue(service, IdentityId(uuid4()))
        accepted = await service.accept(claim, claim.subject_id, NOW)

        assert await service.revoke(accepted, NOW) is None
        # Stale pending snapshot loses the conditional write too
        assert await service.revoke(claim, NOW) is None
