"""Claim domain service."""

import secrets
import string
from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from lunabeam.config import ClaimSettings
from lunabeam.domain.error import DuplicateIdentityError, NotFoundError
from lunabeam.domain.model.claim import Claim
from lunabeam.domain.repository import ClaimRepository
from lunabeam.domain.value import (
    ClaimId,
    ClaimOutcome,
    ClaimPreview,
    ClaimStatus,
    ClaimToken,
    ClaimValidationResult,
    EmailAddress,
    IdentityId,
    Passcode,
    RejectedClaim,
    ValidClaim,
)

from .base import Service

_PASSCODE_ALPHABET = string.ascii_uppercase + string.digits


def _redact(token: ClaimToken | str) -> str:
    value = token.root if isinstance(token, ClaimToken) else token
    return value[:8] + "..."


class ClaimService(Service):
    """Domain service for the account claim lifecycle."""

    def __init__(
        self, claim_repository: ClaimRepository, claim_settings: ClaimSettings
    ) -> None:
        """Initialize claim service.

        Args:
            claim_repository: Claim repository
            claim_settings: Claim configuration
        """
        self.claim_repository = claim_repository
        self.claim_settings = claim_settings

    def generate_token(self) -> ClaimToken:
        """Generate an unguessable URL-safe link token."""
        return ClaimToken(root=secrets.token_urlsafe(32))

    def generate_passcode(self) -> Passcode:
        """Generate a short upper-case passcode for out-of-band delivery."""
        length = self.claim_settings.passcode_length
        return Passcode(
            root="".join(secrets.choice(_PASSCODE_ALPHABET) for _ in range(length))
        )

    async def issue(
        self,
        subject_id: IdentityId,
        issuer_id: IdentityId | None,
        invitee_contact: EmailAddress,
        display_name: str,
        ttl: timedelta,
        now: datetime,
    ) -> Claim:
        """Issue a new pending claim for a subject.

        Earlier pending claims of the subject are closed first: expired ones
        are marked expired, live ones are revoked or cause a rejection,
        depending on the re-issue policy.

        Args:
            subject_id: Identity being claimed
            issuer_id: Provisioning supporter, None if self-serve
            invitee_contact: Address the claim link is sent to
            display_name: Name shown to the invitee
            ttl: Lifetime of the claim
            now: Issue time

        Returns:
            Created claim

        Raises:
            DuplicateIdentityError: If a live claim exists and the policy is "reject"
        """
        with logfire.span(
            "claim_service.issue",
            subject_id=str(subject_id),
            issuer_id=str(issuer_id) if issuer_id else None,
        ):
            for existing in await self.claim_repository.find_pending_by_subject(
                subject_id
            ):
                await self._close_previous(existing, now)

            claim = Claim(
                id=ClaimId(uuid4()),
                token=self.generate_token(),
                passcode=self.generate_passcode(),
                subject_id=subject_id,
                issuer_id=issuer_id,
                invitee_contact=invitee_contact,
                display_name=display_name,
                status=ClaimStatus.PENDING,
                issued_at=now,
                expires_at=now + ttl,
            )

            saved = await self.claim_repository.add(claim)
            logfire.info(
                "Claim issued",
                claim_id=str(saved.id),
                subject_id=str(subject_id),
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def _close_previous(self, existing: Claim, now: datetime) -> None:
        if existing.is_expired(now):
            await self.claim_repository.update_if_pending(existing.expire())
            logfire.info("Expired claim closed", claim_id=str(existing.id))
            return

        if self.claim_settings.reissue_policy == "reject":
            logfire.warn(
                "Live claim already exists",
                claim_id=str(existing.id),
                subject_id=str(existing.subject_id),
            )
            raise DuplicateIdentityError(str(existing.subject_id))

        await self.claim_repository.update_if_pending(existing.revoke(now))
        logfire.info("Previous claim revoked", claim_id=str(existing.id))

    async def get_by_token(self, token: ClaimToken) -> Claim | None:
        """Get claim by token.

        Args:
            token: Claim token

        Returns:
            Claim if found, None otherwise
        """
        with logfire.span("claim_service.get_by_token", token=_redact(token)):
            claim = await self.claim_repository.find_by_token(token)
            if claim:
                logfire.info(
                    "Claim found", claim_id=str(claim.id), status=claim.status.value
                )
            else:
                logfire.warn("Claim not found", token=_redact(token))
            return claim

    async def get_by_id(self, claim_id: ClaimId) -> Claim:
        """Get claim by ID.

        Raises:
            NotFoundError: If claim not found
        """
        claim = await self.claim_repository.find_by_id(claim_id)
        if not claim:
            raise NotFoundError("Claim", str(claim_id))
        return claim

    def evaluate(
        self,
        claim: Claim | None,
        now: datetime,
        invitee_contact: str | None = None,
    ) -> ClaimValidationResult:
        """Decide whether a claim can be used. Pure, performs no I/O.

        Args:
            claim: Claim looked up by token, or None
            now: Evaluation time
            invitee_contact: If given, the claim must have been issued to it

        Returns:
            ValidClaim with a safe preview, or RejectedClaim with the reason
        """
        if claim is None:
            return RejectedClaim(outcome=ClaimOutcome.NOT_FOUND)
        if invitee_contact is not None and not claim.contact_matches(invitee_contact):
            return RejectedClaim(outcome=ClaimOutcome.NOT_FOUND)
        if claim.status != ClaimStatus.PENDING:
            return RejectedClaim(outcome=ClaimOutcome.ALREADY_USED, status=claim.status)
        if claim.is_expired(now):
            return RejectedClaim(outcome=ClaimOutcome.EXPIRED, status=claim.status)

        return ValidClaim(
            preview=ClaimPreview(
                claim_id=claim.id,
                subject_id=claim.subject_id,
                display_name=claim.display_name,
                masked_contact=claim.invitee_contact.masked(),
                expires_at=claim.expires_at,
            )
        )

    async def accept(
        self, claim: Claim, identity_id: IdentityId, now: datetime
    ) -> Claim | None:
        """Transition a claim from pending to accepted.

        Args:
            claim: Pending claim
            identity_id: Authenticated identity the claim is bound to
            now: Acceptance time

        Returns:
            Accepted claim, or None if another caller changed it first
            or it expired
        """
        with logfire.span("claim_service.accept", claim_id=str(claim.id)):
            accepted = claim.accept(identity_id, now)
            won = await self.claim_repository.update_if_pending(
                accepted, unexpired_at=now
            )
            if not won:
                logfire.warn("Claim no longer pending", claim_id=str(claim.id))
                return None
            logfire.info(
                "Claim accepted",
                claim_id=str(claim.id),
                identity_id=str(identity_id),
            )
            return accepted

    async def revoke(self, claim: Claim, now: datetime) -> Claim | None:
        """Transition a claim from pending to revoked.

        Returns:
            Revoked claim, or None if it was no longer pending
        """
        with logfire.span("claim_service.revoke", claim_id=str(claim.id)):
            if claim.status != ClaimStatus.PENDING:
                logfire.warn(
                    "Claim not pending",
                    claim_id=str(claim.id),
                    status=claim.status.value,
                )
                return None
            revoked = claim.revoke(now)
            if not await self.claim_repository.update_if_pending(revoked):
                logfire.warn("Claim no longer pending", claim_id=str(claim.id))
                return None
            logfire.info("Claim revoked", claim_id=str(claim.id))
            return revoked

    async def list_by_issuer(
        self,
        issuer_id: IdentityId,
        status: ClaimStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Claim]:
        """List claims issued by a supporter.

        Args:
            issuer_id: Issuer identity
            status: Optional status filter
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of claims
        """
        with logfire.span(
            "claim_service.list_by_issuer",
            issuer_id=str(issuer_id),
            status=status.value if status else None,
            limit=limit,
            offset=offset,
        ):
            claims = await self.claim_repository.find_by_issuer(
                issuer_id, status, limit, offset
            )
            logfire.info("Claims listed", issuer_id=str(issuer_id), count=len(claims))
            return claims
