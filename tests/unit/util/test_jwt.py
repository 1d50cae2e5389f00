"""Unit tests for JWT utilities."""

from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest

from fundteam.config import AuthSettings
from fundteam.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="test-secret")


def _token(now: datetime, kind="access", settings=SETTINGS) -> str:
    return create_token(
        user_id="7d0c3c4e-3f4a-4c36-9a55-5c1b8a8d2b11",
        email="m@x.com",
        fund_id=None,
        role="manager",
        settings=settings,
        now=now,
        kind=kind,
    )


class TestTokens:
    """Tests for create_token and verify_token."""

    def test_round_trip_claims(self):
        now = datetime.now(timezone.utc)

        payload = verify_token(_token(now), SETTINGS)

        assert payload.email == "m@x.com"
        assert payload.role == "manager"
        assert payload.kind == "access"
        assert payload.exp - payload.iat == timedelta(minutes=60)

    def test_expired(self):
        issued = datetime.now(timezone.utc) - timedelta(hours=2)

        with pytest.raises(JWTError, match="expired"):
            verify_token(_token(issued), SETTINGS)

    def test_wrong_secret(self):
        token = _token(datetime.now(timezone.utc))

        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, AuthSettings(jwt_secret="other"))

    def test_refresh_token_is_not_an_access_token(self):
        token = _token(datetime.now(timezone.utc), kind="refresh")

        with pytest.raises(JWTError, match="Expected access token"):
            verify_token(token, SETTINGS)
        assert verify_token(token, SETTINGS, kind="refresh").kind == "refresh"

    def test_missing_claims(self):
        now = datetime.now(timezone.utc)
        token = pyjwt.encode(
            {"sub": "x", "exp": now + timedelta(minutes=5)}, "test-secret"
        )

        with pytest.raises(JWTError, match="Invalid token claims"):
            verify_token(token, SETTINGS)
