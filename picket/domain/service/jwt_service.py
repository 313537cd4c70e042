"""JWT token domain service."""

from datetime import datetime

import logfire

from picket.config import AuthSettings
from picket.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, issued_at: datetime | None = None) -> str:
        """Create session token for user.

        Args:
            user_id: User ID
            issued_at: Issue time, defaults to now

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(user_id, self.auth_settings, issued_at=issued_at)
            logfire.info("JWT token created", user_id=user_id)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify session token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            TokenExpiredError: If the token has expired
            TokenInvalidError: If the token is malformed or badly signed
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.debug("JWT token verified", user_id=payload.user_id)
                return payload
            except JWTError as e:
                # Expired and invalid are told apart here only
                logfire.warn(
                    "JWT token verification failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise
