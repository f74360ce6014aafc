"""JWT token domain service."""

import logfire

from lunabeam.config import AuthSettings
from lunabeam.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, identity_id: str, email: str, display_name: str) -> str:
        """Create a session token for an identity."""
        with logfire.span("jwt_service.create_token", identity_id=identity_id):
            token = create_token(identity_id, email, display_name, self.auth_settings)
            logfire.info("JWT token created", identity_id=identity_id)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", identity_id=payload.identity_id)
                return payload
            except Exception as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise
