"""Account claim routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from lunabeam.application.usecase.claim import (
    FinalizeClaimRequest,
    FinalizeClaimResponse,
    FinalizeClaimUseCase,
    GetClaimsRequest,
    GetClaimsResponse,
    GetClaimsUseCase,
    IssueClaimRequest,
    IssueClaimResponse,
    IssueClaimUseCase,
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
    RevokeClaimRequest,
    RevokeClaimResponse,
    RevokeClaimUseCase,
    ValidateClaimRequest,
    ValidateClaimResponse,
    ValidateClaimUseCase,
)
from lunabeam.config import Settings
from lunabeam.domain.error import DomainError
from lunabeam.domain.service import JWTService
from lunabeam.domain.value import ClaimStatus
from lunabeam.interface.error import to_http_exception
from lunabeam.util.jwt import JWTError

router = APIRouter(prefix="/claims", tags=["claims"], route_class=DishkaRoute)


class IssueClaimAPIRequest(BaseModel):
    """API request for issuing a claim."""

    subject_id: UUID
    invitee_contact: str
    display_name: str
    ttl_seconds: int | None = None
    message: str | None = Field(default=None, max_length=1000)


class FinalizeClaimAPIRequest(BaseModel):
    """API request for finalizing a claim."""

    passcode: str
    new_credential: str


class ResendInvitationAPIRequest(BaseModel):
    """API request for resending an invitation."""

    message: str | None = Field(default=None, max_length=1000)


def _authenticate(jwt_service: JWTService, auth_token: str | None) -> str:
    """Return the identity ID from the session cookie.

    Raises:
        HTTPException: If not authenticated
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    try:
        return jwt_service.verify_token(auth_token).identity_id
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


@router.post(
    "/", response_model=IssueClaimResponse, status_code=status.HTTP_201_CREATED
)
async def issue_claim(
    request: IssueClaimAPIRequest,
    issue_claim_use_case: FromDishka[IssueClaimUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> IssueClaimResponse:
    """Issue a claim for an account the current supporter provisioned.

    Returns the passcode to hand over in person; the link goes out by email.
    """
    issuer_id = _authenticate(jwt_service, auth_token)

    try:
        return await issue_claim_use_case.execute(
            IssueClaimRequest(
                subject_id=str(request.subject_id),
                issuer_id=issuer_id,
                invitee_contact=request.invitee_contact,
                display_name=request.display_name,
                ttl_seconds=request.ttl_seconds,
                message=request.message,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/", response_model=GetClaimsResponse)
async def get_claims(
    get_claims_use_case: FromDishka[GetClaimsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    status_filter: ClaimStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> GetClaimsResponse:
    """List claims issued by the current supporter."""
    issuer_id = _authenticate(jwt_service, auth_token)

    return await get_claims_use_case.execute(
        GetClaimsRequest(
            issuer_id=issuer_id, status=status_filter, limit=limit, offset=offset
        )
    )


@router.get("/{token}", response_model=ValidateClaimResponse)
async def validate_claim(
    token: str,
    validate_claim_use_case: FromDishka[ValidateClaimUseCase],
    email: str | None = Query(default=None),
) -> ValidateClaimResponse:
    """Check a claim link before showing the claim form.

    Public. Rejections are reported with valid=false rather than an error.
    """
    try:
        return await validate_claim_use_case.execute(
            ValidateClaimRequest(token=token, invitee_contact=email)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{token}/finalize", response_model=FinalizeClaimResponse)
async def finalize_claim(
    token: str,
    request: FinalizeClaimAPIRequest,
    response: Response,
    finalize_claim_use_case: FromDishka[FinalizeClaimUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
):
    """Claim the account and sign the individual in.

    Sets the auth_token session cookie on success.
    """
    try:
        result = await finalize_claim_use_case.execute(
            FinalizeClaimRequest(
                token=token,
                passcode=request.passcode,
                new_credential=request.new_credential,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)

    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=result.model_dump(mode="json"),
        )

    session_token = jwt_service.create_token(
        identity_id=result.identity_id or "",
        email=result.contact or "",
        display_name=result.display_name or "",
    )

    # Cross-site in production (app and API on different subdomains)
    is_production = settings.environment == "production"
    response.set_cookie(
        key="auth_token",
        value=session_token,
        httponly=True,
        secure=is_production,
        samesite="none" if is_production else "lax",
        domain=f".{settings.frontend_host}" if is_production else None,
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )
    return result


@router.post("/{claim_id}/revoke", response_model=RevokeClaimResponse)
async def revoke_claim(
    claim_id: UUID,
    revoke_claim_use_case: FromDishka[RevokeClaimUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RevokeClaimResponse:
    """Revoke a pending claim."""
    identity_id = _authenticate(jwt_service, auth_token)

    try:
        return await revoke_claim_use_case.execute(
            RevokeClaimRequest(claim_id=str(claim_id), identity_id=identity_id)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{claim_id}/resend", response_model=ResendInvitationResponse)
async def resend_invitation(
    claim_id: UUID,
    request: ResendInvitationAPIRequest,
    resend_invitation_use_case: FromDishka[ResendInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ResendInvitationResponse:
    """Send the invitation of a live claim again."""
    identity_id = _authenticate(jwt_service, auth_token)

    try:
        return await resend_invitation_use_case.execute(
            ResendInvitationRequest(
                claim_id=str(claim_id),
                identity_id=identity_id,
                message=request.message,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
