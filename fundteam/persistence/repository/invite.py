"""PostgreSQL implementation of Invite repository."""

from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fundteam.domain.model import Invite
from fundteam.domain.repository import InviteRepository
from fundteam.domain.value import FundId, InviteId, InviteStatus, InviteToken
from fundteam.persistence.mappers import invite_to_dict, row_to_invite
from fundteam.persistence.tables import team_invites_table


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository.

    Writes run inside a savepoint so that a failed write (e.g. the pending
    uniqueness index rejecting an insert) leaves the request transaction
    usable.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        stmt = select(team_invites_table).where(team_invites_table.c.id == invite_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_token(self, token: InviteToken) -> Optional[Invite]:
        """Find an invite by its token."""
        stmt = select(team_invites_table).where(
            team_invites_table.c.token == token.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    def _pending_for(self, email: str, fund_id: FundId):
        return and_(
            team_invites_table.c.email == email,
            team_invites_table.c.fund_id == fund_id,
            team_invites_table.c.status == InviteStatus.PENDING.value,
        )

    async def find_pending_by_email_and_fund(
        self, email: str, fund_id: FundId
    ) -> Optional[Invite]:
        """Find the pending invite for an email within a fund."""
        stmt = select(team_invites_table).where(self._pending_for(email, fund_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def exists_pending_for_email_and_fund(
        self, email: str, fund_id: FundId
    ) -> bool:
        """Check if a pending invite exists without loading it."""
        stmt = select(team_invites_table.c.id).where(self._pending_for(email, fund_id))
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_pending_by_fund(self, fund_id: FundId) -> list[Invite]:
        """List pending invites for a fund, newest first."""
        stmt = (
            select(team_invites_table)
            .where(
                and_(
                    team_invites_table.c.fund_id == fund_id,
                    team_invites_table.c.status == InviteStatus.PENDING.value,
                )
            )
            .order_by(team_invites_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_invite(dict(row)) for row in result.mappings().all()]

    async def save(self, invite: Invite) -> Invite:
        """Save an invite (create or update).

        Raises:
            IntegrityError: If a pending invite already exists for this email and fund
        """
        invite_dict = invite_to_dict(invite)

        existing = await self.find_by_id(invite.id)

        async with self.session.begin_nested():
            if existing:
                stmt = (
                    update(team_invites_table)
                    .where(team_invites_table.c.id == invite.id)
                    .values(**invite_dict)
                )
            else:
                stmt = insert(team_invites_table).values(**invite_dict)
            await self.session.execute(stmt)

        return invite

    async def update_if_pending(self, invite: Invite) -> bool:
        """Update an invite with ``WHERE status = 'pending'``.

        Under concurrent writers the row lock serializes the updates and the
        loser re-evaluates the status condition, matching no row.
        """
        invite_dict = invite_to_dict(invite)
        invite_dict.pop("id")

        async with self.session.begin_nested():
            stmt = (
                update(team_invites_table)
                .where(
                    and_(
                        team_invites_table.c.id == invite.id,
                        team_invites_table.c.status == InviteStatus.PENDING.value,
                    )
                )
                .values(**invite_dict)
            )
            result = await self.session.execute(stmt)

        return result.rowcount == 1
