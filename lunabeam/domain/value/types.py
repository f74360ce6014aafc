"""Domain value objects for LunaBeam.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from lunabeam.domain.value.common import RootValueObject

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s.]+$")


class ClaimStatus(str, Enum):
    """Status of an account claim.

    Only PENDING claims can be finalized. ACCEPTED, EXPIRED and REVOKED
    are terminal.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    REVOKED = "revoked"


class AccountStatus(str, Enum):
    """Ownership status of an individual's account."""

    ACTIVE = "active"
    PENDING_USER_CONSENT = "pending_user_consent"
    USER_CLAIMED = "user_claimed"


class AuthenticationStatus(str, Enum):
    """Authentication status of a profile.

    PLACEHOLDER profiles were provisioned by a supporter and have no
    authentication identity yet; claiming them mints one.
    """

    PLACEHOLDER = "placeholder"
    PENDING = "pending"
    ACTIVE = "active"


class SupporterRole(str, Enum):
    """Role of a member in an individual's circle."""

    INDIVIDUAL = "individual"
    SUPPORTER = "supporter"
    FRIEND = "friend"
    PROVIDER = "provider"
    ADMIN = "admin"


class PermissionLevel(str, Enum):
    """Permission tier granted to a supporter."""

    VIEWER = "viewer"
    COLLABORATOR = "collaborator"
    ADMIN = "admin"


class EmailAddress(RootValueObject[str]):
    """Email address, normalised to lower case without surrounding whitespace."""

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Normalise and validate email format."""
        v = v.strip().lower()
        if len(v) > 254 or not _EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v

    def masked(self) -> str:
        """Mask the local part, e.g. ``a***@example.com``."""
        local, _, domain = self.root.partition("@")
        return f"{local[0]}***@{domain}"


class ClaimToken(RootValueObject[str]):
    """URL-safe claim token embedded in the invitation link."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v


class Passcode(RootValueObject[str]):
    """Short upper-case alphanumeric secret handed to the invitee out of band."""

    @field_validator("root")
    @classmethod
    def validate_passcode_format(cls, v: str) -> str:
        """Validate passcode format."""
        if not re.match(r"^[A-Z0-9]{4,12}$", v):
            raise ValueError("Passcode must be 4-12 upper-case letters or digits")
        return v
