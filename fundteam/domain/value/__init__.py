"""Domain value objects for fund team management."""

from fundteam.domain.value.identifiers import FundId, InvestorId, InviteId, UserId
from fundteam.domain.value.types import (
    InviteStatus,
    InviteToken,
    ReminderJob,
    ReminderType,
    TeamRole,
    reminder_job_id,
)

__all__ = [
    # Identifiers
    "InviteId",
    "UserId",
    "FundId",
    "InvestorId",
    # Types
    "TeamRole",
    "InviteStatus",
    "InviteToken",
    "ReminderType",
    "ReminderJob",
    "reminder_job_id",
]
