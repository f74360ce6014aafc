"""Tests for revoke claim use case."""

from uuid import uuid4

import pytest

from lunabeam.application.usecase.claim import (
    FinalizeClaimRequest,
    FinalizeClaimUseCase,
    IssueClaimRequest,
    IssueClaimUseCase,
    RevokeClaimRequest,
    RevokeClaimUseCase,
    ValidateClaimRequest,
    ValidateClaimUseCase,
)
from lunabeam.domain.error import (
    BusinessRuleViolationError,
    NotAuthorizedError,
    NotFoundError,
)
from lunabeam.domain.value import ClaimOutcome, ClaimStatus, PermissionLevel
from lunabeam.persistence.repository.inmemory import InMemorySupporterRepository
from tests.conftest import NOW, make_supporter, seed_account
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def issue_claim(env):
    subject_id, issuer_id = await seed_account(env)
    use_case = await env.get(IssueClaimUseCase)
    issued = await use_case.execute(
        IssueClaimRequest(
            subject_id=str(subject_id),
            issuer_id=str(issuer_id),
            invitee_contact="alice@example.com",
            display_name="Alice",
        )
    )
    return subject_id, issuer_id, issued


class TestRevokeClaimUseCase:
    """Tests for RevokeClaimUseCase."""

    @pytest.mark.asyncio
    async def test_issuer_revokes_claim(self, unit_env):
        """Test revoking a pending claim invalidates the link."""
        # Arrange
        _, issuer_id, issued = await issue_claim(unit_env)
        use_case = await unit_env.get(RevokeClaimUseCase)
        validate = await unit_env.get(ValidateClaimUseCase)

        # Act
        response = await use_case.execute(
            RevokeClaimRequest(claim_id=issued.claim_id, identity_id=str(issuer_id))
        )

        # Assert
        assert response.status == ClaimStatus.REVOKED
        assert response.revoked_at == NOW
        validated = await validate.execute(ValidateClaimRequest(token=issued.token))
        assert validated.valid is False
        assert validated.status == ClaimStatus.REVOKED

    @pytest.mark.asyncio
    async def test_revoked_claim_cannot_be_finalized(self, unit_env):
        """Test finalizing after revocation is rejected."""
        _, issuer_id, issued = await issue_claim(unit_env)
        revoke = await unit_env.get(RevokeClaimUseCase)
        finalize = await unit_env.get(FinalizeClaimUseCase)
        await revoke.execute(
            RevokeClaimRequest(claim_id=issued.claim_id, identity_id=str(issuer_id))
        )

        response = await finalize.execute(
            FinalizeClaimRequest(
                token=issued.token, passcode=issued.passcode, new_credential="sixchars"
            )
        )

        assert response.success is False
        assert response.outcome == ClaimOutcome.ALREADY_USED
        assert response.message == "This invitation has been revoked"

    @pytest.mark.asyncio
    async def test_admin_supporter_may_revoke(self, unit_env):
        """Test another admin of the individual may revoke."""
        subject_id, _, issued = await issue_claim(unit_env)
        supporters = await unit_env.get(InMemorySupporterRepository)
        admin_id = uuid4()
        await supporters.save(
            make_supporter(subject_id, admin_id, permission_level=PermissionLevel.ADMIN)
        )
        use_case = await unit_env.get(RevokeClaimUseCase)

        response = await use_case.execute(
            RevokeClaimRequest(claim_id=issued.claim_id, identity_id=str(admin_id))
        )

        assert response.status == ClaimStatus.REVOKED

    @pytest.mark.asyncio
    async def test_stranger_cannot_revoke(self, unit_env):
        """Test an unrelated identity is refused."""
        _, _, issued = await issue_claim(unit_env)
        use_case = await unit_env.get(RevokeClaimUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                RevokeClaimRequest(claim_id=issued.claim_id, identity_id=str(uuid4()))
            )

    @pytest.mark.asyncio
    async def test_revoke_twice(self, unit_env):
        """Test only pending claims can be revoked."""
        _, issuer_id, issued = await issue_claim(unit_env)
        use_case = await unit_env.get(RevokeClaimUseCase)
        request = RevokeClaimRequest(
            claim_id=issued.claim_id, identity_id=str(issuer_id)
        )
        await use_case.execute(request)

        with pytest.raises(BusinessRuleViolationError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_revoke_unknown_claim(self, unit_env):
        """Test revoking a claim that does not exist."""
        use_case = await unit_env.get(RevokeClaimUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                RevokeClaimRequest(claim_id=str(uuid4()), identity_id=str(uuid4()))
            )
