"""Notifier infrastructure providers."""

from dishka import Scope, provide

from lunabeam.adapter.resend import ResendNotifier
from lunabeam.config import Settings
from lunabeam.domain.service import Notifier
from lunabeam.util.di.base import ProviderBase


class NotifierProvider(ProviderBase):
    """Notifier component base."""

    __mock_component__ = "notifier"


class ProdNotifierProvider(NotifierProvider):
    """Production notifier provider sending email through Resend."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notifier(self, settings: Settings) -> Notifier:
        """Provide Resend notifier.

        A missing API key is not fatal at startup: sends fail with
        DeliveryError and claims are still issued.
        """
        return ResendNotifier(
            api_key=settings.notifier.resend_api_key,
            api_url=settings.notifier.api_url,
            sender=settings.notifier.sender,
            subject=settings.notifier.subject,
            timeout=settings.notifier.timeout_seconds,
        )
