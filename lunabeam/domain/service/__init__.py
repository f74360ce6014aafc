"""Domain services."""

from .base import Service
from .claim_service import ClaimService
from .credential_service import CredentialService
from .jwt_service import JWTService
from .notification import DeliveryReport, InvitationService, Notifier
from .profile_service import ProfileService
from .supporter_service import SupporterService

__all__ = [
    "ClaimService",
    "CredentialService",
    "DeliveryReport",
    "InvitationService",
    "JWTService",
    "Notifier",
    "ProfileService",
    "Service",
    "SupporterService",
]
