"""Tests for claim value objects."""

import pytest
from pydantic import ValidationError

from lunabeam.domain.value import (
    ClaimOutcome,
    ClaimStatus,
    ClaimToken,
    EmailAddress,
    Passcode,
    RejectedClaim,
)


class TestEmailAddress:
    """Tests for EmailAddress."""

    def test_normalises_case_and_whitespace(self):
        email = EmailAddress(root="  Alice@Example.COM ")
        assert email.root == "alice@example.com"

    @pytest.mark.parametrize(
        "value", ["", "alice", "alice@", "@example.com", "alice@example", "a b@x.io"]
    )
    def test_rejects_malformed(self, value):
        with pytest.raises(ValidationError):
            EmailAddress(root=value)

    def test_masked_keeps_first_letter_and_domain(self):
        assert EmailAddress(root="alice@example.com").masked() == "a***@example.com"


class TestSecrets:
    """Tests for ClaimToken and Passcode."""

    def test_empty_token_rejected(self):
        with pytest.raises(ValidationError):
            ClaimToken(root="")

    def test_passcode_must_be_upper_case_alphanumeric(self):
        assert Passcode(root="AB12CD").root == "AB12CD"
        with pytest.raises(ValidationError):
            Passcode(root="ab12cd")
        with pytest.raises(ValidationError):
            Passcode(root="AB1")


class TestRejectedClaim:
    """Tests for rejection messages."""

    def test_each_outcome_has_a_distinct_message(self):
        messages = {
            RejectedClaim(outcome=outcome).message
            for outcome in ClaimOutcome
            if outcome != ClaimOutcome.VALID
        }
        assert len(messages) == 4

    def test_revoked_claim_has_its_own_message(self):
        rejection = RejectedClaim(
            outcome=ClaimOutcome.ALREADY_USED, status=ClaimStatus.REVOKED
        )
        assert rejection.message == "This invitation has been revoked"
        assert rejection.valid is False

    def test_expired_status_reads_as_expired(self):
        rejection = RejectedClaim(
            outcome=ClaimOutcome.ALREADY_USED, status=ClaimStatus.EXPIRED
        )
        assert rejection.message == "This invitation has expired"
