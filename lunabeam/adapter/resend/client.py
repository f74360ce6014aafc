"""Invitation notifier backed by the Resend HTTP API."""

from dataclasses import dataclass
from html import escape

import httpx
import logfire

from lunabeam.domain.error import DeliveryError
from lunabeam.domain.service.notification import Notifier
from lunabeam.domain.value import EmailAddress


def render_invitation(
    subject_display_name: str,
    issuer_display_name: str | None,
    claim_link: str,
    message: str | None = None,
) -> str:
    """Render the HTML body of an invitation email.

    The passcode is never included; the supporter hands it over separately.
    """
    inviter = escape(issuer_display_name) if issuer_display_name else "Someone"
    note = (
        '<div style="background: #f5f5f5; padding: 15px; border-radius: 8px;">'
        f'<p style="margin: 0; font-style: italic;">"{escape(message)}"</p>'
        "</div>"
        if message
        else ""
    )
    return f"""
      <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h1 style="color: #333; text-align: center;">Welcome to LunaBeam!</h1>
        <p>Hi {escape(subject_display_name)},</p>
        <p>{inviter} has set up a LunaBeam account for you. Open the link below
        and enter the passcode they gave you to choose your password.</p>
        {note}
        <p style="text-align: center; margin: 30px 0;">
          <a href="{escape(claim_link, quote=True)}">Claim Your Account</a>
        </p>
        <p><strong>Important:</strong> This link expires for security reasons.</p>
        <p style="font-size: 12px; color: #666;">
          If you didn't expect this email, you can safely ignore it.
        </p>
      </div>
    """


class ResendNotifier(Notifier):
    """Sends invitation emails through https://resend.com."""

    def __init__(
        self,
        api_key: str | None,
        api_url: str,
        sender: str,
        subject: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Resend notifier.

        Args:
            api_key: Resend API key; sending fails while it is unset
            api_url: Resend emails endpoint
            sender: From header
            subject: Email subject
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.api_url = api_url
        self.sender = sender
        self.subject = subject
        self.timeout = timeout
        self._transport = transport

    async def send(
        self,
        contact: EmailAddress,
        subject_display_name: str,
        issuer_display_name: str | None,
        claim_link: str,
        message: str | None = None,
    ) -> None:
        """Send the invitation email.

        Raises:
            DeliveryError: If Resend is not configured or rejects the request
        """
        if not self.api_key:
            logfire.error("Resend API key not configured")
            raise DeliveryError("Email service not configured")

        payload = {
            "from": self.sender,
            "to": [contact.root],
            "subject": self.subject,
            "html": render_invitation(
                subject_display_name, issuer_display_name, claim_link, message
            ),
        }

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self.timeout
            ) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as e:
            logfire.error("Resend HTTP error", error=str(e))
            raise DeliveryError(f"HTTP error sending invitation: {e}") from e

        if response.status_code >= 400:
            try:
                detail = response.json().get("message") or response.reason_phrase
            except ValueError:
                detail = response.reason_phrase
            logfire.error(
                "Resend rejected invitation",
                status_code=response.status_code,
                error=detail,
            )
            raise DeliveryError(f"Failed to send email: {detail}")

        logfire.info(
            "Invitation email sent",
            email_id=response.json().get("id"),
            to=contact.masked(),
        )


@dataclass
class SentInvitation:
    """Invitation captured by MockNotifier."""

    contact: EmailAddress
    subject_display_name: str
    issuer_display_name: str | None
    claim_link: str
    message: str | None


class MockNotifier(Notifier):
    """Mock notifier for testing.

    Records invitations instead of sending them. Set ``fail`` to make every
    send raise DeliveryError.
    """

    def __init__(self) -> None:
        self.sent: list[SentInvitation] = []
        self.fail = False

    async def send(
        self,
        contact: EmailAddress,
        subject_display_name: str,
        issuer_display_name: str | None,
        claim_link: str,
        message: str | None = None,
    ) -> None:
        if self.fail:
            raise DeliveryError("Mock delivery failure")
        self.sent.append(
            SentInvitation(
                contact=contact,
                subject_display_name=subject_display_name,
                issuer_display_name=issuer_display_name,
                claim_link=claim_link,
                message=message,
            )
        )
