"""Cancel team invite use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from fundteam.application.usecase.base import BaseUseCase, CamelModel
from fundteam.domain.repository import UnitOfWork
from fundteam.domain.service import InviteService, MembershipService, ReminderScheduler
from fundteam.domain.value import InviteId, UserId


class CancelTeamInviteRequest(BaseModel):
    """Request to cancel a pending invite."""

    caller_id: UUID
    invite_id: UUID
    now: datetime


class CancelTeamInviteResponse(CamelModel):
    """Response after cancelling an invite."""

    success: bool = True
    reminders_cancelled: int = 0


class CancelTeamInviteUseCase(BaseUseCase):
    """Use case for cancelling a pending invite and its reminders."""

    def __init__(
        self,
        membership_service: MembershipService,
        invite_service: InviteService,
        reminder_scheduler: ReminderScheduler,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize use case.

        Args:
            membership_service: Membership domain service
            invite_service: Invite domain service
            reminder_scheduler: Reminder scheduler
            unit_of_work: Commits the cancellation before reminders are dropped
        """
        self.membership_service = membership_service
        self.invite_service = invite_service
        self.reminder_scheduler = reminder_scheduler
        self.unit_of_work = unit_of_work

    async def execute(
        self, request: CancelTeamInviteRequest
    ) -> CancelTeamInviteResponse:
        """Execute cancel team invite use case.

        Raises:
            ForbiddenError: If the caller is not a manager of the invite's fund
            NotFoundError: If the invite does not exist
            InvalidStateError: If the invite is not pending
        """
        with logfire.span("cancel_team_invite", invite_id=str(request.invite_id)):
            manager = await self.membership_service.require_manager(
                UserId(request.caller_id), "cancel invites"
            )
            invite = await self.invite_service.cancel_invite(
                InviteId(request.invite_id), manager.fund_id, request.now
            )
            await self.unit_of_work.commit()
            cancelled = await self.reminder_scheduler.cancel_reminders(invite.id)
            return CancelTeamInviteResponse(reminders_cancelled=cancelled)
