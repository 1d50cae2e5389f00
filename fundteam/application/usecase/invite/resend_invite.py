"""Resend team invite use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from fundteam.application.usecase.base import BaseUseCase, CamelModel
from fundteam.domain.repository import UnitOfWork
from fundteam.domain.service import (
    InviteService,
    MembershipService,
    NotificationService,
    ReminderScheduler,
)
from fundteam.domain.value import InviteId, UserId


class ResendTeamInviteRequest(BaseModel):
    """Request to resend a pending invite."""

    caller_id: UUID
    invite_id: UUID
    now: datetime


class ResendTeamInviteResponse(CamelModel):
    """Response after resending an invite.

    ``email_error`` is set when the expiry was extended but the email
    could not be sent.
    """

    success: bool = True
    expires_at: datetime
    email_sent: bool
    email_error: str | None = None


class ResendTeamInviteUseCase(BaseUseCase):
    """Use case for resending an invite.

    Extends the expiry from now, replaces the scheduled reminders with a
    fresh set anchored at now, and emails the recipient a reminder.
    """

    def __init__(
        self,
        membership_service: MembershipService,
        invite_service: InviteService,
        reminder_scheduler: ReminderScheduler,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize use case.

        Args:
            membership_service: Membership domain service
            invite_service: Invite domain service
            reminder_scheduler: Reminder scheduler
            notification_service: Email notifications
            unit_of_work: Commits the new expiry before reminders and email
        """
        self.membership_service = membership_service
        self.invite_service = invite_service
        self.reminder_scheduler = reminder_scheduler
        self.notification_service = notification_service
        self.unit_of_work = unit_of_work

    async def execute(
        self, request: ResendTeamInviteRequest
    ) -> ResendTeamInviteResponse:
        """Execute resend team invite use case.

        Raises:
            ForbiddenError: If the caller is not a manager of the invite's fund
            NotFoundError: If the invite does not exist
            InvalidStateError: If the invite is not pending
        """
        with logfire.span("resend_team_invite", invite_id=str(request.invite_id)):
            manager = await self.membership_service.require_manager(
                UserId(request.caller_id), "resend invites"
            )
            resent = await self.invite_service.resend_invite(
                InviteId(request.invite_id), manager.fund_id, request.now
            )
            await self.unit_of_work.commit()
            invite = resent.invite

            await self.reminder_scheduler.reschedule_reminders(
                invite.id, invite.fund_id, request.now
            )

            email_error = None
            try:
                await self.notification_service.send_team_invite_reminder(
                    invite, resent.context, request.now
                )
            except Exception as e:
                email_error = str(e) or type(e).__name__
                logfire.warn(
                    "Invite resent but email failed",
                    invite_id=str(invite.id),
                    error=email_error,
                )

            return ResendTeamInviteResponse(
                expires_at=invite.expires_at,
                email_sent=email_error is None,
                email_error=email_error,
            )
