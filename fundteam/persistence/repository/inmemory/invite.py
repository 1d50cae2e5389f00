"""In-memory invite repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from fundteam.domain.model.invite import Invite
from fundteam.domain.repository.invite import InviteRepository
from fundteam.domain.value import FundId, InviteId, InviteStatus, InviteToken


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing."""

    def __init__(self) -> None:
        self._invites: list[Invite] = []

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        for invite in self._invites:
            if invite.id == invite_id:
                return invite
        return None

    async def find_by_token(self, token: InviteToken) -> Optional[Invite]:
        """Find an invite by its token."""
        for invite in self._invites:
            if invite.token == token:
                return invite
        return None

    async def find_pending_by_email_and_fund(
        self, email: str, fund_id: FundId
    ) -> Optional[Invite]:
        """Find the pending invite for an email within a fund."""
        for invite in self._invites:
            if (
                invite.email == email
                and invite.fund_id == fund_id
                and invite.status == InviteStatus.PENDING
            ):
                return invite
        return None

    async def exists_pending_for_email_and_fund(
        self, email: str, fund_id: FundId
    ) -> bool:
        """Check if a pending invite exists for an email within a fund."""
        return await self.find_pending_by_email_and_fund(email, fund_id) is not None

    async def find_pending_by_fund(self, fund_id: FundId) -> list[Invite]:
        """List pending invites for a fund, newest first."""
        pending = [
            invite
            for invite in self._invites
            if invite.fund_id == fund_id and invite.status == InviteStatus.PENDING
        ]
        return sorted(pending, key=lambda invite: invite.created_at, reverse=True)

    async def save(self, invite: Invite) -> Invite:
        """Save an invite (create or update).

        Raises:
            IntegrityError: If a pending invite already exists for this email and fund
        """
        for i, existing in enumerate(self._invites):
            if existing.id == invite.id:
                self._invites[i] = invite
                return invite

        if invite.status == InviteStatus.PENDING:
            existing_pending = await self.find_pending_by_email_and_fund(
                invite.email, invite.fund_id
            )
            if existing_pending:
                raise IntegrityError("Duplicate pending invite", None, Exception())

        self._invites.append(invite)
        return invite

    async def update_if_pending(self, invite: Invite) -> bool:
        """Replace a stored invite only if it is still pending."""
        for i, existing in enumerate(self._invites):
            if existing.id == invite.id:
                if existing.status != InviteStatus.PENDING:
                    return False
                self._invites[i] = invite
                return True
        return False
