"""Claim use cases."""

from lunabeam.application.usecase.claim.finalize_claim import (
    FinalizeClaimRequest,
    FinalizeClaimResponse,
    FinalizeClaimUseCase,
)
from lunabeam.application.usecase.claim.get_claims import (
    ClaimItem,
    GetClaimsRequest,
    GetClaimsResponse,
    GetClaimsUseCase,
)
from lunabeam.application.usecase.claim.issue_claim import (
    IssueClaimRequest,
    IssueClaimResponse,
    IssueClaimUseCase,
)
from lunabeam.application.usecase.claim.resend_invitation import (
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
)
from lunabeam.application.usecase.claim.revoke_claim import (
    RevokeClaimRequest,
    RevokeClaimResponse,
    RevokeClaimUseCase,
)
from lunabeam.application.usecase.claim.validate_claim import (
    ValidateClaimRequest,
    ValidateClaimResponse,
    ValidateClaimUseCase,
)

__all__ = [
    "ClaimItem",
    "FinalizeClaimRequest",
    "FinalizeClaimResponse",
    "FinalizeClaimUseCase",
    "GetClaimsRequest",
    "GetClaimsResponse",
    "GetClaimsUseCase",
    "IssueClaimRequest",
    "IssueClaimResponse",
    "IssueClaimUseCase",
    "ResendInvitationRequest",
    "ResendInvitationResponse",
    "ResendInvitationUseCase",
    "RevokeClaimRequest",
    "RevokeClaimResponse",
    "RevokeClaimUseCase",
    "ValidateClaimRequest",
    "ValidateClaimResponse",
    "ValidateClaimUseCase",
]
