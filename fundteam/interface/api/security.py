"""Caller authentication for protected routes."""

from uuid import UUID

from fundteam.domain.service import JWTService
from fundteam.interface.error import UnauthorizedError
from fundteam.util.jwt import JWTError


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def authenticate(
    jwt_service: JWTService,
    authorization: str | None,
    auth_token: str | None,
) -> UUID:
    """Resolve the caller's user ID from an access token.

    The bearer header takes precedence over the ``auth_token`` cookie.

    Args:
        jwt_service: JWT service
        authorization: Authorization header value
        auth_token: JWT token from cookie

    Returns:
        The caller's user ID

    Raises:
        UnauthorizedError: If no valid access token was presented
    """
    token = bearer_token(authorization) or auth_token
    if not token:
        raise UnauthorizedError("Not authenticated")

    try:
        payload = jwt_service.verify_token(token)
    except JWTError as e:
        raise UnauthorizedError(str(e))

    try:
        return UUID(payload.user_id)
    except ValueError:
        raise UnauthorizedError("Invalid token")
