"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from fundteam.domain.model import Fund, InvestorProfile, Invite, User
from fundteam.domain.value import (
    FundId,
    InvestorId,
    InviteId,
    InviteStatus,
    InviteToken,
    TeamRole,
    UserId,
)


def _uuid(value: Any) -> UUID | None:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model.

    Args:
        row: Database row as dict

    Returns:
        Invite domain model
    """
    invited_by = _uuid(row.get("invited_by_user_id"))
    return Invite(
        id=InviteId(_uuid(row["id"])),
        email=row["email"],
        fund_id=FundId(_uuid(row["fund_id"])),
        role=TeamRole(row["role"]),
        token=InviteToken(row["token"]),
        status=InviteStatus(row["status"]),
        invited_by_user_id=UserId(invited_by) if invited_by else None,
        expires_at=row["expires_at"],
        accepted_at=row.get("accepted_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict.

    Args:
        invite: Invite domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = invite.model_dump()
    data["role"] = invite.role.value
    data["status"] = invite.status.value
    return data


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    fund_id = _uuid(row.get("fund_id"))
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        fund_id=FundId(fund_id) if fund_id else None,
        role=TeamRole(row["role"]) if row.get("role") else None,
        password_hash=row.get("password_hash"),
        onboarding_completed=row.get("onboarding_completed", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["role"] = user.role.value if user.role else None
    return data


def row_to_investor(row: Dict[str, Any]) -> InvestorProfile:
    """Convert database row to InvestorProfile domain model."""
    return InvestorProfile(
        id=InvestorId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        fund_id=FundId(_uuid(row["fund_id"])),
        email=row["email"],
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        status=row["status"],
        created_at=row["created_at"],
    )


def investor_to_dict(profile: InvestorProfile) -> Dict[str, Any]:
    """Convert InvestorProfile domain model to database dict."""
    return profile.model_dump()


def row_to_fund(row: Dict[str, Any]) -> Fund:
    """Convert database row to Fund domain model."""
    return Fund(
        id=FundId(_uuid(row["id"])),
        name=row["name"],
        platform_name=row.get("platform_name"),
        created_at=row["created_at"],
    )


def fund_to_dict(fund: Fund) -> Dict[str, Any]:
    """Convert Fund domain model to database dict."""
    return fund.model_dump()
