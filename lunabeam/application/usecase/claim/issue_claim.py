"""Issue claim use case."""

from datetime import datetime, timedelta
from uuid import UUID

import logfire
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from lunabeam.application.usecase.base import BaseUseCase
from lunabeam.config import ClaimSettings
from lunabeam.domain.error import NotAuthorizedError, ValidationError
from lunabeam.domain.repository import TransactionManager
from lunabeam.domain.service import (
    ClaimService,
    InvitationService,
    ProfileService,
    SupporterService,
)
from lunabeam.domain.value import ClaimStatus, EmailAddress, IdentityId
from lunabeam.util.clock import Clock


class IssueClaimRequest(BaseModel):
    """Request to issue a claim for a provisioned account."""

    subject_id: str
    issuer_id: str | None = None  # None for self-serve claims
    invitee_contact: str
    display_name: str
    ttl_seconds: int | None = None  # Defaults to claims.ttl_seconds
    message: str | None = Field(default=None, max_length=1000)


class IssueClaimResponse(BaseModel):
    """Response after issuing a claim.

    The passcode is returned to the issuer only, who hands it to the
    invitee separately from the emailed link.
    """

    claim_id: str
    claim_url: str
    token: str
    passcode: str
    display_name: str
    invitee_contact: str
    status: ClaimStatus
    issued_at: datetime
    expires_at: datetime
    delivered: bool
    delivery_error: str | None = None


class IssueClaimUseCase(BaseUseCase):
    """Use case for issuing an account claim and sending the invitation."""

    def __init__(
        self,
        claim_service: ClaimService,
        profile_service: ProfileService,
        supporter_service: SupporterService,
        invitation_service: InvitationService,
        transactions: TransactionManager,
        clock: Clock,
        claim_settings: ClaimSettings,
    ) -> None:
        """Initialize use case.

        Args:
            claim_service: Claim domain service
            profile_service: Profile domain service
            supporter_service: Supporter domain service
            invitation_service: Invitation delivery service
            transactions: Transaction boundary
            clock: Time source
            claim_settings: Claim configuration
        """
        self.claim_service = claim_service
        self.profile_service = profile_service
        self.supporter_service = supporter_service
        self.invitation_service = invitation_service
        self.transactions = transactions
        self.clock = clock
        self.claim_settings = claim_settings

    async def execute(self, request: IssueClaimRequest) -> IssueClaimResponse:
        """Issue a claim, then send the invitation.

        A failed delivery does not undo the claim; it is reported in the
        response so the issuer can resend.

        Args:
            request: Issue claim request

        Returns:
            Created claim with its secrets and the delivery outcome

        Raises:
            ValidationError: If the contact, lifetime or display name is malformed
            NotFoundError: If the subject has no profile
            NotAuthorizedError: If the issuer does not manage the subject's account
            DuplicateIdentityError: If a live claim exists and re-issue is rejected
            PersistenceError: If the claim could not be stored
        """
        subject_id = IdentityId(UUID(request.subject_id))
        issuer_id = IdentityId(UUID(request.issuer_id)) if request.issuer_id else None
        contact = self._parse_contact(request.invitee_contact)
        display_name = request.display_name.strip()
        if not display_name:
            raise ValidationError("Display name must not be empty")
        ttl_seconds = (
            request.ttl_seconds
            if request.ttl_seconds is not None
            else self.claim_settings.ttl_seconds
        )
        if ttl_seconds <= 0:
            raise ValidationError("Claim lifetime must be positive")
        if ttl_seconds > self.claim_settings.max_ttl_seconds:
            raise ValidationError(
                "Claim lifetime must be at most "
                f"{self.claim_settings.max_ttl_seconds} seconds"
            )

        with logfire.span(
            "issue_claim",
            subject_id=str(subject_id),
            issuer_id=str(issuer_id) if issuer_id else None,
        ):
            async with self.transactions.begin():
                await self.profile_service.get_by_identity(subject_id)

                issuer_name = None
                if issuer_id is not None:
                    if not await self.supporter_service.can_manage(
                        subject_id, issuer_id
                    ):
                        raise NotAuthorizedError(
                            "Account", str(subject_id), str(issuer_id)
                        )
                    issuer = await self.profile_service.find_by_identity(issuer_id)
                    issuer_name = issuer.first_name if issuer else None

                claim = await self.claim_service.issue(
                    subject_id=subject_id,
                    issuer_id=issuer_id,
                    invitee_contact=contact,
                    display_name=display_name,
                    ttl=timedelta(seconds=ttl_seconds),
                    now=self.clock.now(),
                )

            # The link must never point at a claim that could still roll back
            await self.transactions.commit()

            report = await self.invitation_service.send_invitation(
                claim, issuer_name, request.message
            )

            return IssueClaimResponse(
                claim_id=str(claim.id),
                claim_url=self.invitation_service.claim_link(claim.token),
                token=claim.token.root,
                passcode=claim.passcode.root,
                display_name=claim.display_name,
                invitee_contact=claim.invitee_contact.root,
                status=claim.status,
                issued_at=claim.issued_at,
                expires_at=claim.expires_at,
                delivered=report.delivered,
                delivery_error=report.error,
            )

    @staticmethod
    def _parse_contact(value: str) -> EmailAddress:
        try:
            return EmailAddress(root=value)
        except PydanticValidationError as e:
            logfire.warn("Invalid invitee contact")
            raise ValidationError("Invalid invitee email address") from e
