"""JWT token domain service."""

from datetime import datetime

import logfire

from fundteam.config import AuthSettings
from fundteam.domain.model.user import User
from fundteam.domain.value.common import ValueObject
from fundteam.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class SessionTokens(ValueObject):
    """Access and refresh token pair issued after sign-in."""

    access_token: str
    refresh_token: str


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_session(self, user: User, now: datetime) -> SessionTokens:
        """Issue an access/refresh token pair for an account.

        Args:
            user: Signed-in account
            now: Issue instant

        Returns:
            Session tokens
        """
        with logfire.span("jwt_service.create_session", user_id=str(user.id)):
            claims = {
                "user_id": str(user.id),
                "email": user.email,
                "fund_id": str(user.fund_id) if user.fund_id else None,
                "role": user.role.value if user.role else None,
                "settings": self.auth_settings,
                "now": now,
            }
            tokens = SessionTokens(
                access_token=create_token(**claims, kind="access"),
                refresh_token=create_token(**claims, kind="refresh"),
            )
            logfire.info("Session tokens created", user_id=str(user.id))
            return tokens

    def verify_token(self, token: str) -> TokenPayload:
        """Verify an access token and extract its payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.debug("JWT token verified", user_id=payload.user_id)
                return payload
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
