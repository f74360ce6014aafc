"""Tests for the claim HTTP routes."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio

from lunabeam.adapter.resend import MockNotifier
from lunabeam.domain.service import CredentialService, JWTService
from lunabeam.domain.value import EmailAddress, IdentityId, PermissionLevel
from lunabeam.interface.api.app import create_app
from lunabeam.util.clock import FrozenClock
from tests.conftest import seed_account
from tests.di import build_test_container


@pytest_asyncio.fixture
async def api():
    """HTTP client on an app backed by the mock container, plus that container."""
    container = build_test_container()
    app = create_app(container)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        async with container() as env:
            yield client, env
    await container.close()


async def session_cookie(env, identity_id) -> dict[str, str]:
    jwt_service = await env.get(JWTService)
    token = jwt_service.create_token(str(identity_id), "sam@example.com", "Sam")
    return {"Cookie": f"auth_token={token}"}


async def issue(client, env, **overrides):
    subject_id, issuer_id = await seed_account(env)
    body = {
        "subject_id": str(subject_id),
        "invitee_contact": "alice@example.com",
        "display_name": "Alice",
    }
    body.update(overrides)
    headers = await session_cookie(env, issuer_id)
    response = await client.post("/claims/", json=body, headers=headers)
    return issuer_id, headers, response


class TestClaimRoutes:
    """Tests for /claims."""

    @pytest.mark.asyncio
    async def test_issue_requires_session(self, api):
        client, env = api
        subject_id, _ = await seed_account(env)

        response = await client.post(
            "/claims/",
            json={
                "subject_id": str(subject_id),
                "invitee_contact": "alice@example.com",
                "display_name": "Alice",
            },
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_full_claim_flow(self, api):
        """Test issue, validate and finalize over HTTP."""
        # Arrange
        client, env = api
        notifier = await env.get(MockNotifier)

        # Act: issue
        _, _, issued = await issue(client, env)

        # Assert
        assert issued.status_code == 201
        claim = issued.json()
        assert claim["status"] == "pending"
        assert claim["delivered"] is True
        assert notifier.sent[0].claim_link == claim["claim_url"]

        # Act: validate
        validated = await client.get(f"/claims/{claim['token']}")

        # Assert
        assert validated.status_code == 200
        assert validated.json()["valid"] is True
        assert validated.json()["masked_contact"] == "a***@example.com"
        assert "passcode" not in validated.json()

        # Act: finalize
        finalized = await client.post(
            f"/claims/{claim['token']}/finalize",
            json={"passcode": claim["passcode"], "new_credential": "sixchars"},
        )

        # Assert
        assert finalized.status_code == 200
        assert finalized.json()["success"] is True
        assert finalized.json()["contact"] == "alice@example.com"
        session = finalized.cookies.get("auth_token")
        assert session
        jwt_service = await env.get(JWTService)
        assert (
            jwt_service.verify_token(session).identity_id
            == finalized.json()["identity_id"]
        )

    @pytest.mark.asyncio
    async def test_finalize_rejection_is_400_with_outcome(self, api):
        client, env = api
        _, _, issued = await issue(client, env)
        token = issued.json()["token"]

        response = await client.post(
            f"/claims/{token}/finalize",
            json={"passcode": "WRONG1", "new_credential": "sixchars"},
        )

        assert response.status_code == 400
        assert response.json()["outcome"] == "invalid"
        assert response.json()["message"] == "Incorrect passcode"
        assert "auth_token" not in response.cookies

    @pytest.mark.asyncio
    async def test_finalize_weak_password_is_400(self, api):
        client, env = api
        _, _, issued = await issue(client, env)
        claim = issued.json()

        response = await client.post(
            f"/claims/{claim['token']}/finalize",
            json={"passcode": claim["passcode"], "new_credential": "pw"},
        )

        assert response.status_code == 400
        assert "at least" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_finalize_contact_in_use_is_409(self, api):
        client, env = api
        _, _, issued = await issue(client, env)
        claim = issued.json()
        credential_service = await env.get(CredentialService)
        await credential_service.set_credential(
            IdentityId(uuid4()),
            EmailAddress(root="alice@example.com"),
            "existing-pass",
            datetime.now(timezone.utc),
        )

        response = await client.post(
            f"/claims/{claim['token']}/finalize",
            json={"passcode": claim["passcode"], "new_credential": "sixchars"},
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_validate_expired(self, api):
        client, env = api
        _, _, issued = await issue(client, env)
        clock = await env.get(FrozenClock)
        clock.advance(timedelta(days=2))

        response = await client.get(f"/claims/{issued.json()['token']}")

        assert response.status_code == 200
        assert response.json()["outcome"] == "expired"

    @pytest.mark.asyncio
    async def test_validate_unknown_token(self, api):
        client, _ = api

        response = await client.get("/claims/no-such-token")

        assert response.status_code == 200
        assert response.json() == {
            "valid": False,
            "outcome": "not_found",
            "status": None,
            "claim_id": None,
            "display_name": None,
            "masked_contact": None,
            "expires_at": None,
            "message": "Claim not found",
        }

    @pytest.mark.asyncio
    async def test_issue_invalid_email_is_400(self, api):
        client, env = api

        _, _, response = await issue(client, env, invitee_contact="nope")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_issue_huge_lifetime_is_400(self, api):
        client, env = api

        _, _, response = await issue(client, env, ttl_seconds=10**12)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_issue_by_viewer_is_403(self, api):
        client, env = api
        subject_id, issuer_id = await seed_account(
            env, is_provisioner=False, permission_level=PermissionLevel.VIEWER
        )

        response = await client.post(
            "/claims/",
            json={
                "subject_id": str(subject_id),
                "invitee_contact": "alice@example.com",
                "display_name": "Alice",
            },
            headers=await session_cookie(env, issuer_id),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_list_revoke_and_resend(self, api):
        """Test the issuer-side management routes."""
        # Arrange
        client, env = api
        _, headers, issued = await issue(client, env)
        claim_id = issued.json()["claim_id"]

        # Act & Assert: list
        listed = await client.get("/claims/", headers=headers)
        assert listed.status_code == 200
        assert [c["claim_id"] for c in listed.json()["claims"]] == [claim_id]
        assert "token" not in listed.json()["claims"][0]

        # Act & Assert: resend
        resent = await client.post(
            f"/claims/{claim_id}/resend", json={"message": "Reminder"}, headers=headers
        )
        assert resent.status_code == 200
        assert resent.json()["delivered"] is True

        # Act & Assert: revoke
        revoked = await client.post(f"/claims/{claim_id}/revoke", headers=headers)
        assert revoked.status_code == 200
        assert revoked.json()["status"] == "revoked"

        again = await client.post(f"/claims/{claim_id}/revoke", headers=headers)
        assert again.status_code == 409

        filtered = await client.get("/claims/?status=pending", headers=headers)
        assert filtered.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_revoke_unknown_claim_is_404(self, api):
        client, env = api
        _, issuer_id = await seed_account(env)

        response = await client.post(
            "/claims/00000000-0000-0000-0000-000000000000/revoke",
            headers=await session_cookie(env, issuer_id),
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_health(self, api):
        client, _ = api

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
