"""Team invite entity.

A manager invites someone by email to join their fund in a given role.
The recipient proves possession of the emailed token to accept.
"""

from datetime import datetime
from typing import Optional

from fundteam.domain.model.common import TimestampedModel
from fundteam.domain.value import (
    FundId,
    InviteId,
    InviteStatus,
    InviteToken,
    TeamRole,
    UserId,
)


class Invite(TimestampedModel):
    """Team invite entity.

    Business rules:
    - At most one pending invite per (email, fund)
    - Only pending invites can be accepted, cancelled or resent
    - A pending invite is unusable once now > expires_at
    - The token never changes for the life of the invite
    """

    id: InviteId
    email: str
    fund_id: FundId
    role: TeamRole
    token: InviteToken
    status: InviteStatus = InviteStatus.PENDING
    invited_by_user_id: Optional[UserId] = None
    expires_at: datetime
    accepted_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        """Whether the invite can still change state."""
        return self.status == InviteStatus.PENDING

    def is_expired(self, now: datetime) -> bool:
        """Whether the invite's expiry instant has passed.

        Args:
            now: Current instant

        Returns:
            True when now is strictly after expires_at
        """
        return now > self.expires_at
