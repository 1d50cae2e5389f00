"""JWT token utilities."""

from datetime import datetime, timedelta
from typing import Literal

import jwt
from pydantic import BaseModel, ValidationError

from fundteam.config import AuthSettings

TokenKind = Literal["access", "refresh"]


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    email: str
    fund_id: str | None = None
    role: str | None = None
    kind: TokenKind = "access"
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    email: str,
    fund_id: str | None,
    role: str | None,
    settings: AuthSettings,
    now: datetime,
    kind: TokenKind = "access",
) -> str:
    """Create a signed JWT for the user.

    Args:
        user_id: User ID
        email: Account email
        fund_id: Fund the account is bound to, if any
        role: Team role within the fund, if any
        settings: Authentication settings
        now: Issue instant
        kind: "access" for short-lived tokens, "refresh" for long-lived ones

    Returns:
        Encoded JWT token
    """
    if kind == "access":
        expiry = now + timedelta(minutes=settings.access_token_expiry_minutes)
    else:
        expiry = now + timedelta(days=settings.refresh_token_expiry_days)

    payload = {
        "user_id": user_id,
        "email": email,
        "fund_id": fund_id,
        "role": role,
        "kind": kind,
        "iat": now,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(
    token: str, settings: AuthSettings, kind: TokenKind = "access"
) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings
        kind: Expected token kind

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid, expired or of the wrong kind
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    try:
        decoded = TokenPayload(**payload)
    except ValidationError:
        raise JWTError("Invalid token claims")
    if decoded.kind != kind:
        raise JWTError(f"Expected {kind} token")
    return decoded
