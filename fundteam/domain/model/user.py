"""User account entity.

An account belongs to at most one fund at a time through its
(fund_id, role) binding.
"""

from typing import Optional

from fundteam.domain.model.common import TimestampedModel
from fundteam.domain.value import FundId, TeamRole, UserId


class User(TimestampedModel):
    """User account with its fund binding."""

    id: UserId
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    fund_id: Optional[FundId] = None
    role: Optional[TeamRole] = None
    password_hash: Optional[str] = None
    onboarding_completed: bool = False

    @property
    def display_name(self) -> Optional[str]:
        """Full name if the account has one."""
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or None

    def is_member_of(self, fund_id: FundId) -> bool:
        """Whether the account is bound to the given fund."""
        return self.fund_id == fund_id
