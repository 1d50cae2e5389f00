"""SQLAlchemy table definitions for fund team management.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

TEAM_ROLES = ("manager", "accountant", "attorney", "investor")
INVITE_STATUSES = ("pending", "accepted", "cancelled")


def _in(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


# ============================================================================
# FUNDS TABLE (tenants)
# ============================================================================
funds_table = Table(
    "funds",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(255), nullable=False),
    Column("platform_name", String(255), nullable=True),  # Email branding override
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# USERS TABLE (accounts bound to at most one fund)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("role", String(20), nullable=True),
    Column(
        "fund_id", UUID, ForeignKey("funds.id", ondelete="SET NULL"), nullable=True
    ),
    Column(
        "onboarding_completed", Boolean, nullable=False, server_default="false"
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(_in("role", TEAM_ROLES), name="ck_users_role"),
)

Index("idx_users_fund_id", users_table.c.fund_id)

# ============================================================================
# INVESTORS TABLE (one profile per account and fund)
# ============================================================================
investors_table = Table(
    "investors",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("fund_id", UUID, ForeignKey("funds.id", ondelete="CASCADE"), nullable=False),
    Column("email", String(255), nullable=False),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("status", String(20), nullable=False, server_default="active"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "fund_id", name="uq_investors_user_fund"),
)

# ============================================================================
# TEAM INVITES TABLE
# ============================================================================
team_invites_table = Table(
    "team_invites",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(255), nullable=False),
    Column("fund_id", UUID, ForeignKey("funds.id", ondelete="CASCADE"), nullable=False),
    Column("role", String(20), nullable=False),
    Column("token", String(64), nullable=False, unique=True),  # 64 hex chars
    Column("status", String(20), nullable=False, server_default="pending"),
    Column(
        "invited_by_user_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(_in("role", TEAM_ROLES), name="ck_team_invites_role"),
    CheckConstraint(_in("status", INVITE_STATUSES), name="ck_team_invites_status"),
)

Index(
    "idx_team_invites_fund_status",
    team_invites_table.c.fund_id,
    team_invites_table.c.status,
)

# Only one pending invite per email within a fund
Index(
    "idx_team_invites_unique_pending_email_fund",
    team_invites_table.c.email,
    team_invites_table.c.fund_id,
    unique=True,
    postgresql_where=team_invites_table.c.status == "pending",
)
