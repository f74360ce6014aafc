"""Invitation delivery.

The Notifier is an external collaborator; this module defines its contract
and the domain service that builds claim links and reports delivery.
"""

from dataclasses import dataclass

import logfire

from lunabeam.domain.error import DeliveryError
from lunabeam.domain.model import Claim
from lunabeam.domain.value import ClaimToken, EmailAddress

from .base import Service


class Notifier:
    """Generic invitation notifier interface."""

    async def send(
        self,
        contact: EmailAddress,
        subject_display_name: str,
        issuer_display_name: str | None,
        claim_link: str,
        message: str | None = None,
    ) -> None:
        """Send an invitation containing the claim link.

        Args:
            contact: Recipient address
            subject_display_name: Name of the individual whose account is claimed
            issuer_display_name: Name of the supporter who set up the account
            claim_link: Link embedding the claim token
            message: Optional personal note from the supporter

        Raises:
            DeliveryError: If the invitation could not be delivered
        """
        raise NotImplementedError


@dataclass
class DeliveryReport:
    """Outcome of an invitation delivery attempt."""

    delivered: bool
    error: str | None = None


class InvitationService(Service):
    """Domain service sending claim invitations."""

    def __init__(self, notifier: Notifier, frontend_url: str) -> None:
        """Initialize invitation service.

        Args:
            notifier: Invitation notifier
            frontend_url: Base URL of the web app hosting the claim page
        """
        self.notifier = notifier
        self.frontend_url = frontend_url.rstrip("/")

    def claim_link(self, token: ClaimToken) -> str:
        """Build the link the invitee opens to claim the account."""
        return f"{self.frontend_url}/claim/{token.root}"

    async def send_invitation(
        self,
        claim: Claim,
        issuer_display_name: str | None,
        message: str | None = None,
    ) -> DeliveryReport:
        """Send the invitation for a claim.

        Delivery failure is reported, not raised: the claim stays valid and
        the caller can retry.

        Args:
            claim: Claim to announce
            issuer_display_name: Name of the issuing supporter
            message: Optional personal note

        Returns:
            Delivery report
        """
        with logfire.span("invitation_service.send_invitation", claim_id=str(claim.id)):
            try:
                await self.notifier.send(
                    contact=claim.invitee_contact,
                    subject_display_name=claim.display_name,
                    issuer_display_name=issuer_display_name,
                    claim_link=self.claim_link(claim.token),
                    message=message,
                )
            except DeliveryError as e:
                logfire.warn(
                    "Invitation delivery failed", claim_id=str(claim.id), error=str(e)
                )
                return DeliveryReport(delivered=False, error=str(e))

            logfire.info(
                "Invitation sent",
                claim_id=str(claim.id),
                contact=claim.invitee_contact.masked(),
            )
            return DeliveryReport(delivered=True)
