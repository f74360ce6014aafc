"""Tests for issue claim use case."""

from datetime import timedelta
from uuid import uuid4

import pytest

from lunabeam.adapter.resend import MockNotifier
from lunabeam.application.usecase.claim import (
    IssueClaimRequest,
    IssueClaimUseCase,
    ValidateClaimRequest,
    ValidateClaimUseCase,
)
from lunabeam.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from lunabeam.domain.repository import TransactionManager
from lunabeam.domain.value import (
    AuthenticationStatus,
    ClaimStatus,
    IdentityId,
    PermissionLevel,
)
from lunabeam.persistence.repository.inmemory import InMemoryClaimRepository
from lunabeam.util.clock import FrozenClock
from tests.conftest import NOW, seed_account
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def issue_request(subject_id, issuer_id, **overrides) -> IssueClaimRequest:
    fields = dict(
        subject_id=str(subject_id),
        issuer_id=str(issuer_id) if issuer_id else None,
        invitee_contact="alice@example.com",
        display_name="Alice",
    )
    fields.update(overrides)
    return IssueClaimRequest(**fields)


class TestIssueClaimUseCase:
    """Tests for IssueClaimUseCase."""

    @pytest.mark.asyncio
    async def test_issue_claim_and_send_invitation(self, unit_env):
        """Test issuing a claim returns both secrets and emails the link."""
        # Arrange
        subject_id, issuer_id = await seed_account(unit_env)
        use_case = await unit_env.get(IssueClaimUseCase)
        notifier = await unit_env.get(MockNotifier)

        # Act
        response = await use_case.execute(
            issue_request(subject_id, issuer_id, message="See you soon")
        )

        # Assert
        assert response.status == ClaimStatus.PENDING
        assert response.issued_at == NOW
        assert response.expires_at == NOW + timedelta(seconds=86400)
        assert response.delivered is True
        assert response.delivery_error is None
        assert response.claim_url.endswith(f"/claim/{response.token}")

        assert len(notifier.sent) == 1
        sent = notifier.sent[0]
        assert sent.contact.root == "alice@example.com"
        assert sent.claim_link == response.claim_url
        assert sent.subject_display_name == "Alice"
        assert sent.issuer_display_name == "Sam"
        assert sent.message == "See you soon"
        # Passcode travels separately from the link
        assert response.passcode not in sent.claim_link

    @pytest.mark.asyncio
    async def test_claim_is_committed_before_invitation_is_sent(self, unit_env):
        """Test the invitation only goes out for a durably stored claim."""
        # Arrange
        subject_id, issuer_id = await seed_account(unit_env)
        use_case = await unit_env.get(IssueClaimUseCase)
        notifier = await unit_env.get(MockNotifier)
        transactions = await unit_env.get(TransactionManager)
        commits_at_send = []
        send = notifier.send

        async def recording_send(*args, **kwargs):
            commits_at_send.append(transactions.commits)
            await send(*args, **kwargs)

        notifier.send = recording_send

        # Act
        await use_case.execute(issue_request(subject_id, issuer_id))

        # Assert
        assert commits_at_send == [1]

    @pytest.mark.asyncio
    async def test_failed_commit_sends_nothing(self, unit_env):
        """Test no invitation is sent when the claim cannot be committed."""
        # Arrange
        subject_id, issuer_id = await seed_account(unit_env)
        use_case = await unit_env.get(IssueClaimUseCase)
        notifier = await unit_env.get(MockNotifier)
        transactions = await unit_env.get(TransactionManager)

        async def failing_commit():
            raise PersistenceError("commit refused")

        transactions.commit = failing_commit

        # Act & Assert
        with pytest.raises(PersistenceError):
            await use_case.execute(issue_request(subject_id, issuer_id))
        assert notifier.sent == []

    @pytest.mark.asyncio
    async def test_issued_claim_is_immediately_valid(self, unit_env):
        """Test a freshly issued claim validates as valid."""
        subject_id, issuer_id = await seed_account(unit_env)
        issue = await unit_env.get(IssueClaimUseCase)
        validate = await unit_env.get(ValidateClaimUseCase)

        issued = await issue.execute(issue_request(subject_id, issuer_id))
        result = await validate.execute(ValidateClaimRequest(token=issued.token))

        assert result.valid is True
        assert result.display_name == "Alice"

    @pytest.mark.asyncio
    async def test_contact_is_normalised(self, unit_env):
        """Test the stored contact is lower-cased and trimmed."""
        subject_id, issuer_id = await seed_account(unit_env)
        use_case = await unit_env.get(IssueClaimUseCase)

        response = await use_case.execute(
            issue_request(subject_id, issuer_id, invitee_contact=" Alice@Example.com ")
        )

        assert response.invitee_contact == "alice@example.com"

    @pytest.mark.asyncio
    async def test_custom_lifetime(self, unit_env):
        """Test an explicit lifetime overrides the default."""
        subject_id, issuer_id = await seed_account(unit_env)
        use_case = await unit_env.get(IssueClaimUseCase)

        response = await use_case.execute(
            issue_request(subject_id, issuer_id, ttl_seconds=3600)
        )

        assert response.expires_at == NOW + timedelta(hours=1)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"invitee_contact": "not-an-email"},
            {"display_name": "   "},
            {"ttl_seconds": 0},
            {"ttl_seconds": -5},
            {"ttl_seconds": 2592001},
            {"ttl_seconds": 10**12},
        ],
    )
    async def test_malformed_input_rejected(self, unit_env, overrides):
        """Test malformed input raises and stores nothing."""
        # Arrange
        subject_id, issuer_id = await seed_account(unit_env)
        use_case = await unit_env.get(IssueClaimUseCase)
        claims = await unit_env.get(InMemoryClaimRepository)
        notifier = await unit_env.get(MockNotifier)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(issue_request(subject_id, issuer_id, **overrides))
        assert claims.snapshot() == {}
        assert notifier.sent == []

    @pytest.mark.asyncio
    async def test_unknown_subject(self, unit_env):
        """Test issuing for a subject without a profile."""
        use_case = await unit_env.get(IssueClaimUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(issue_request(uuid4(), None))

    @pytest.mark.asyncio
    async def test_viewer_cannot_issue(self, unit_env):
        """Test a supporter who neither provisioned nor administers is refused."""
        # Arrange
        subject_id, issuer_id = await seed_account(
            unit_env, is_provisioner=False, permission_level=PermissionLevel.VIEWER
        )
        use_case = await unit_env.get(IssueClaimUseCase)
        claims = await unit_env.get(InMemoryClaimRepository)

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(issue_request(subject_id, issuer_id))
        assert claims.snapshot() == {}

    @pytest.mark.asyncio
    async def test_admin_supporter_can_issue(self, unit_env):
        """Test an admin-level supporter may issue without being provisioner."""
        subject_id, issuer_id = await seed_account(
            unit_env, is_provisioner=False, permission_level=PermissionLevel.ADMIN
        )
        use_case = await unit_env.get(IssueClaimUseCase)

        response = await use_case.execute(issue_request(subject_id, issuer_id))

        assert response.status == ClaimStatus.PENDING

    @pytest.mark.asyncio
    async def test_stranger_cannot_issue(self, unit_env):
        """Test an identity with no relationship is refused."""
        subject_id, _ = await seed_account(unit_env)
        use_case = await unit_env.get(IssueClaimUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(issue_request(subject_id, IdentityId(uuid4())))

    @pytest.mark.asyncio
    async def test_self_serve_claim(self, unit_env):
        """Test a claim without issuer skips the supporter check."""
        subject_id, _ = await seed_account(
            unit_env, authentication_status=AuthenticationStatus.PENDING
        )
        use_case = await unit_env.get(IssueClaimUseCase)
        notifier = await unit_env.get(MockNotifier)

        response = await use_case.execute(issue_request(subject_id, None))

        assert response.delivered is True
        assert notifier.sent[0].issuer_display_name is None

    @pytest.mark.asyncio
    async def test_reissue_revokes_previous_link(self, unit_env):
        """Test a second issue invalidates the first link."""
        # Arrange
        subject_id, issuer_id = await seed_account(unit_env)
        issue = await unit_env.get(IssueClaimUseCase)
        validate = await unit_env.get(ValidateClaimUseCase)
        first = await issue.execute(issue_request(subject_id, issuer_id))

        # Act
        second = await issue.execute(issue_request(subject_id, issuer_id))

        # Assert
        old = await validate.execute(ValidateClaimRequest(token=first.token))
        new = await validate.execute(ValidateClaimRequest(token=second.token))
        assert old.valid is False
        assert old.status == ClaimStatus.REVOKED
        assert old.message == "This invitation has been revoked"
        assert new.valid is True

    @pytest.mark.asyncio
    async def test_reissue_after_expiry_marks_previous_link_expired(self, unit_env):
        """Test a lapsed link superseded by a new one still reads as expired."""
        # Arrange
        subject_id, issuer_id = await seed_account(unit_env)
        issue = await unit_env.get(IssueClaimUseCase)
        validate = await unit_env.get(ValidateClaimUseCase)
        clock = await unit_env.get(FrozenClock)
        first = await issue.execute(
            issue_request(subject_id, issuer_id, ttl_seconds=60)
        )
        clock.advance(timedelta(seconds=120))

        # Act
        await issue.execute(issue_request(subject_id, issuer_id))

        # Assert
        old = await validate.execute(ValidateClaimRequest(token=first.token))
        assert old.valid is False
        assert old.status == ClaimStatus.EXPIRED
        assert old.message == "This invitation has expired"

    @pytest.mark.asyncio
    async def test_delivery_failure_is_reported_and_claim_stays_valid(
        self, unit_env
    ):
        """Test a notifier failure does not undo the claim."""
        # Arrange
        subject_id, issuer_id = await seed_account(unit_env)
        issue = await unit_env.get(IssueClaimUseCase)
        validate = await unit_env.get(ValidateClaimUseCase)
        notifier = await unit_env.get(MockNotifier)
        notifier.fail = True

        # Act
        response = await issue.execute(issue_request(subject_id, issuer_id))

        # Assert
        assert response.delivered is False
        assert response.delivery_error
        assert response.passcode
        result = await validate.execute(ValidateClaimRequest(token=response.token))
        assert result.valid is True
