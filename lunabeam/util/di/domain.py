"""Domain layer DI providers."""

from dishka import Scope, provide

from lunabeam.config import AuthSettings, ClaimSettings, Settings
from lunabeam.domain.repository import (
    ClaimRepository,
    CredentialRepository,
    ProfileRepository,
    SupporterRepository,
)
from lunabeam.domain.service import (
    ClaimService,
    CredentialService,
    InvitationService,
    JWTService,
    Notifier,
    ProfileService,
    SupporterService,
)
from lunabeam.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_claim_service(
        self, claim_repository: ClaimRepository, claim_settings: ClaimSettings
    ) -> ClaimService:
        """Provide claim domain service."""
        return ClaimService(
            claim_repository=claim_repository, claim_settings=claim_settings
        )

    @provide
    def get_profile_service(
        self, profile_repository: ProfileRepository
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(profile_repository=profile_repository)

    @provide
    def get_supporter_service(
        self, supporter_repository: SupporterRepository
    ) -> SupporterService:
        """Provide supporter domain service."""
        return SupporterService(supporter_repository=supporter_repository)

    @provide
    def get_credential_service(
        self,
        credential_repository: CredentialRepository,
        claim_settings: ClaimSettings,
    ) -> CredentialService:
        """Provide credential domain service."""
        return CredentialService(
            credential_repository=credential_repository,
            claim_settings=claim_settings,
        )

    @provide
    def get_invitation_service(
        self, notifier: Notifier, settings: Settings
    ) -> InvitationService:
        """Provide invitation delivery service."""
        return InvitationService(
            notifier=notifier, frontend_url=settings.api.frontend_url
        )
