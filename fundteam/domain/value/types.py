"""Domain value objects for fund team management.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from datetime import datetime
from enum import Enum

from pydantic import field_validator

from fundteam.domain.value.common import RootValueObject, ValueObject
from fundteam.domain.value.identifiers import FundId, InviteId


class TeamRole(str, Enum):
    """Role a team member holds within a fund."""

    MANAGER = "manager"
    ACCOUNTANT = "accountant"
    ATTORNEY = "attorney"
    INVESTOR = "investor"


class InviteStatus(str, Enum):
    """Status of a team invite.

    Only PENDING invites can transition. ACCEPTED and CANCELLED are terminal.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"


class ReminderType(str, Enum):
    """Kinds of reminder jobs scheduled for a pending invite."""

    DAY_3 = "team_invite_reminder_3d"
    DAY_5 = "team_invite_reminder_5d"


INVITE_TOKEN_PATTERN = re.compile(r"^[0-9a-f]{64}$")


class InviteToken(RootValueObject[str]):
    """Opaque invite secret: 32 random bytes rendered as 64 lowercase hex chars."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is exactly 64 hex characters."""
        if not INVITE_TOKEN_PATTERN.match(v):
            raise ValueError("Invite token must be 64 lowercase hex characters")
        return v

    @property
    def redacted(self) -> str:
        """Token prefix safe to put in logs."""
        return self.root[:8] + "..."


class ReminderJob(ValueObject):
    """A delayed reminder for one invite.

    The job ID is deterministic so a job can be cancelled, or replaced by
    rescheduling, without remembering any broker-assigned handle.
    """

    type: ReminderType
    invite_id: InviteId
    fund_id: FundId
    scheduled_at: datetime
    attempt: int = 0

    @property
    def job_id(self) -> str:
        """Deterministic job identifier."""
        return reminder_job_id(self.type, self.invite_id)


def reminder_job_id(reminder_type: ReminderType, invite_id: InviteId) -> str:
    """Build the deterministic job ID for a reminder type and invite."""
    return f"{reminder_type.value}:team_invite:{invite_id}"
