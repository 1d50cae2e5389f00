"""Invite token utilities."""

import secrets
from datetime import datetime, timedelta
from typing import Protocol

from fundteam.domain.value import InviteToken

INVITE_TOKEN_BYTES = 32
DEFAULT_INVITE_EXPIRY_DAYS = 7


class TokenGenerator(Protocol):
    """Callable producing a fresh invite token."""

    def __call__(self) -> InviteToken: ...


def generate_invite_token() -> InviteToken:
    """Generate a new invite token.

    Draws 32 bytes from the OS CSPRNG and renders them as 64 lowercase
    hex characters. Tokens are never derived from invite fields.

    Returns:
        A fresh invite token
    """
    return InviteToken(root=secrets.token_hex(INVITE_TOKEN_BYTES))


def compute_expiry(
    now: datetime, days: int = DEFAULT_INVITE_EXPIRY_DAYS
) -> datetime:
    """Compute when an invite issued at ``now`` stops being usable.

    Args:
        now: Issue instant
        days: Validity window in days

    Returns:
        Expiry instant
    """
    return now + timedelta(days=days)
