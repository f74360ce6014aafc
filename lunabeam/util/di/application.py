"""Application layer DI providers."""

from dishka import Scope, provide

from lunabeam.application.usecase.claim import (
    FinalizeClaimUseCase,
    GetClaimsUseCase,
    IssueClaimUseCase,
    ResendInvitationUseCase,
    RevokeClaimUseCase,
    ValidateClaimUseCase,
)
from lunabeam.config import ClaimSettings
from lunabeam.domain.repository import TransactionManager
from lunabeam.domain.service import (
    ClaimService,
    CredentialService,
    InvitationService,
    ProfileService,
    SupporterService,
)
from lunabeam.util.clock import Clock
from lunabeam.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_issue_claim_use_case(
        self,
        claim_service: ClaimService,
        profile_service: ProfileService,
        supporter_service: SupporterService,
        invitation_service: InvitationService,
        transactions: TransactionManager,
        clock: Clock,
        claim_settings: ClaimSettings,
    ) -> IssueClaimUseCase:
        """Provide issue claim use case."""
        return IssueClaimUseCase(
            claim_service=claim_service,
            profile_service=profile_service,
            supporter_service=supporter_service,
            invitation_service=invitation_service,
            transactions=transactions,
            clock=clock,
            claim_settings=claim_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_validate_claim_use_case(
        self, claim_service: ClaimService, clock: Clock
    ) -> ValidateClaimUseCase:
        """Provide validate claim use case."""
        return ValidateClaimUseCase(claim_service=claim_service, clock=clock)

    @provide(scope=Scope.REQUEST)
    def get_finalize_claim_use_case(
        self,
        claim_service: ClaimService,
        profile_service: ProfileService,
        supporter_service: SupporterService,
        credential_service: CredentialService,
        transactions: TransactionManager,
        clock: Clock,
    ) -> FinalizeClaimUseCase:
        """Provide finalize claim use case."""
        return FinalizeClaimUseCase(
            claim_service=claim_service,
            profile_service=profile_service,
            supporter_service=supporter_service,
            credential_service=credential_service,
            transactions=transactions,
            clock=clock,
        )

    @provide(scope=Scope.REQUEST)
    def get_revoke_claim_use_case(
        self,
        claim_service: ClaimService,
        supporter_service: SupporterService,
        transactions: TransactionManager,
        clock: Clock,
    ) -> RevokeClaimUseCase:
        """Provide revoke claim use case."""
        return RevokeClaimUseCase(
            claim_service=claim_service,
            supporter_service=supporter_service,
            transactions=transactions,
            clock=clock,
        )

    @provide(scope=Scope.REQUEST)
    def get_resend_invitation_use_case(
        self,
        claim_service: ClaimService,
        profile_service: ProfileService,
        supporter_service: SupporterService,
        invitation_service: InvitationService,
        clock: Clock,
    ) -> ResendInvitationUseCase:
        """Provide resend invitation use case."""
        return ResendInvitationUseCase(
            claim_service=claim_service,
            profile_service=profile_service,
            supporter_service=supporter_service,
            invitation_service=invitation_service,
            clock=clock,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_claims_use_case(
        self, claim_service: ClaimService, clock: Clock
    ) -> GetClaimsUseCase:
        """Provide get claims use case."""
        return GetClaimsUseCase(claim_service=claim_service, clock=clock)
