"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from lunabeam.domain.model import AuthCredential, Claim, Profile, Supporter
from lunabeam.domain.value import (
    AccountStatus,
    AuthenticationStatus,
    ClaimId,
    ClaimStatus,
    ClaimToken,
    EmailAddress,
    IdentityId,
    Passcode,
    PermissionLevel,
    ProfileId,
    SupporterId,
    SupporterRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value is not None else None


def row_to_claim(row: Dict[str, Any]) -> Claim:
    """Convert database row to Claim domain model.

    Args:
        row: Database row as dict

    Returns:
        Claim domain model
    """
    issuer_id = _optional_uuid(row.get("issuer_id"))
    claimed_identity_id = _optional_uuid(row.get("claimed_identity_id"))
    return Claim(
        id=ClaimId(_uuid(row["id"])),
        token=ClaimToken(root=row["token"]),
        passcode=Passcode(root=row["passcode"]),
        subject_id=IdentityId(_uuid(row["subject_id"])),
        issuer_id=IdentityId(issuer_id) if issuer_id else None,
        invitee_contact=EmailAddress(root=row["invitee_contact"]),
        display_name=row["display_name"],
        status=ClaimStatus(row["status"]),
        issued_at=row["issued_at"],
        expires_at=row["expires_at"],
        claimed_at=row.get("claimed_at"),
        claimed_identity_id=(
            IdentityId(claimed_identity_id) if claimed_identity_id else None
        ),
        revoked_at=row.get("revoked_at"),
    )


def claim_to_dict(claim: Claim) -> Dict[str, Any]:
    """Convert Claim domain model to database dict.

    Args:
        claim: Claim domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": claim.id,
        "token": claim.token.root,
        "passcode": claim.passcode.root,
        "subject_id": claim.subject_id,
        "issuer_id": claim.issuer_id,
        "invitee_contact": claim.invitee_contact.root,
        "display_name": claim.display_name,
        "status": claim.status.value,
        "issued_at": claim.issued_at,
        "expires_at": claim.expires_at,
        "claimed_at": claim.claimed_at,
        "claimed_identity_id": claim.claimed_identity_id,
        "revoked_at": claim.revoked_at,
    }


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model."""
    created_by = _optional_uuid(row.get("created_by_supporter"))
    return Profile(
        id=ProfileId(_uuid(row["id"])),
        identity_id=IdentityId(_uuid(row["identity_id"])),
        first_name=row["first_name"],
        email=EmailAddress(root=row["email"]) if row.get("email") else None,
        account_status=AccountStatus(row["account_status"]),
        authentication_status=AuthenticationStatus(row["authentication_status"]),
        password_set=row["password_set"],
        onboarding_complete=row["onboarding_complete"],
        created_by_supporter=IdentityId(created_by) if created_by else None,
        claimed_at=row.get("claimed_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    """Convert Profile domain model to database dict."""
    return {
        "id": profile.id,
        "identity_id": profile.identity_id,
        "first_name": profile.first_name,
        "email": profile.email.root if profile.email else None,
        "account_status": profile.account_status.value,
        "authentication_status": profile.authentication_status.value,
        "password_set": profile.password_set,
        "onboarding_complete": profile.onboarding_complete,
        "created_by_supporter": profile.created_by_supporter,
        "claimed_at": profile.claimed_at,
        "created_at": profile.created_at,
        "updated_at": profile.updated_at,
    }


def row_to_supporter(row: Dict[str, Any]) -> Supporter:
    """Convert database row to Supporter domain model."""
    invited_by = _optional_uuid(row.get("invited_by"))
    return Supporter(
        id=SupporterId(_uuid(row["id"])),
        individual_id=IdentityId(_uuid(row["individual_id"])),
        supporter_id=IdentityId(_uuid(row["supporter_id"])),
        role=SupporterRole(row["role"]),
        permission_level=PermissionLevel(row["permission_level"]),
        is_provisioner=row["is_provisioner"],
        invited_by=IdentityId(invited_by) if invited_by else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def supporter_to_dict(supporter: Supporter) -> Dict[str, Any]:
    """Convert Supporter domain model to database dict."""
    return {
        "id": supporter.id,
        "individual_id": supporter.individual_id,
        "supporter_id": supporter.supporter_id,
        "role": supporter.role.value,
        "permission_level": supporter.permission_level.value,
        "is_provisioner": supporter.is_provisioner,
        "invited_by": supporter.invited_by,
        "created_at": supporter.created_at,
        "updated_at": supporter.updated_at,
    }


def row_to_credential(row: Dict[str, Any]) -> AuthCredential:
    """Convert database row to AuthCredential domain model."""
    return AuthCredential(
        identity_id=IdentityId(_uuid(row["identity_id"])),
        email=EmailAddress(root=row["email"]),
        secret_hash=row["secret_hash"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def credential_to_dict(credential: AuthCredential) -> Dict[str, Any]:
    """Convert AuthCredential domain model to database dict."""
    return {
        "identity_id": credential.identity_id,
        "email": credential.email.root,
        "secret_hash": credential.secret_hash,
        "created_at": credential.created_at,
        "updated_at": credential.updated_at,
    }
