"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from lunabeam.config import AuthSettings, ClaimSettings, Settings
from lunabeam.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_claim_settings(self, settings: Settings) -> ClaimSettings:
        """Provide claim settings."""
        return settings.claims
