"""Test configuration and helpers."""

from datetime import datetime, timedelta, timezone
from itertools import count
from uuid import uuid4

from fundteam.config import Settings
from fundteam.domain.model import Fund, User
from fundteam.domain.repository import FundRepository, UserRepository
from fundteam.domain.value import FundId, InviteToken, TeamRole, UserId
from fundteam.util.jwt import create_token

# Fixed instant so expiry arithmetic in tests is exact
T0 = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


def days(n: float) -> timedelta:
    return timedelta(days=n)


def sequential_tokens():
    """Token generator producing distinct, predictable tokens."""
    counter = count(1)

    def _next() -> InviteToken:
        return InviteToken(f"{next(counter):064x}")

    return _next


async def make_fund(
    fund_repo: FundRepository, name: str = "Acme Ventures I", platform_name=None
) -> Fund:
    """Create and save a fund."""
    fund = Fund(
        id=FundId(uuid4()), name=name, platform_name=platform_name, created_at=T0
    )
    return await fund_repo.save(fund)


async def make_user(
    user_repo: UserRepository,
    email: str,
    fund_id: FundId | None = None,
    role: TeamRole | None = None,
    first_name: str | None = "Test",
    last_name: str | None = "User",
) -> User:
    """Create and save an account."""
    user = User(
        id=UserId(uuid4()),
        email=email,
        first_name=first_name,
        last_name=last_name,
        fund_id=fund_id,
        role=role,
        password_hash=None,
        onboarding_completed=fund_id is not None,
        created_at=T0,
        updated_at=T0,
    )
    return await user_repo.save(user)


def access_token_for(user: User, settings: Settings | None = None) -> str:
    """Signed access token for an account, valid for an hour from now."""
    settings = settings or Settings()
    return create_token(
        user_id=str(user.id),
        email=user.email,
        fund_id=str(user.fund_id) if user.fund_id else None,
        role=user.role.value if user.role else None,
        settings=settings.auth,
        now=datetime.now(timezone.utc),
    )
