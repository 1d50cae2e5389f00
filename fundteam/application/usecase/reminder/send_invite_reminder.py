"""Send scheduled invite reminder use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from fundteam.application.usecase.base import BaseUseCase
from fundteam.domain.error import DependencyFailureError
from fundteam.domain.service import InviteService, NotificationService
from fundteam.domain.value import InviteId, ReminderType


class SendInviteReminderRequest(BaseModel):
    """A due reminder for one invite."""

    invite_id: UUID
    fund_id: UUID
    reminder_type: ReminderType
    now: datetime


class SendInviteReminderResponse(BaseModel):
    """Outcome of a scheduled reminder."""

    sent: bool
    skipped_reason: str | None = None
    message_id: str | None = None


class SendInviteReminderUseCase(BaseUseCase):
    """Use case for delivering a scheduled reminder.

    Invites that disappeared or left the pending state since the reminder
    was scheduled are skipped without error.
    """

    def __init__(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
            notification_service: Email notifications
        """
        self.invite_service = invite_service
        self.notification_service = notification_service

    async def execute(
        self, request: SendInviteReminderRequest
    ) -> SendInviteReminderResponse:
        """Execute send invite reminder use case.

        Args:
            request: Due reminder

        Returns:
            Whether the reminder was sent, or why it was skipped

        Raises:
            DependencyFailureError: If the email could not be delivered
        """
        with logfire.span(
            "send_invite_reminder",
            invite_id=str(request.invite_id),
            reminder_type=request.reminder_type.value,
        ):
            invite = await self.invite_service.find_invite(InviteId(request.invite_id))
            if not invite:
                logfire.info(
                    "Reminder skipped, invite not found",
                    invite_id=str(request.invite_id),
                )
                return SendInviteReminderResponse(
                    sent=False, skipped_reason="not_found"
                )

            if invite.fund_id != request.fund_id:
                logfire.warn(
                    "Reminder skipped, invite belongs to another fund",
                    invite_id=str(invite.id),
                    fund_id=str(request.fund_id),
                )
                return SendInviteReminderResponse(
                    sent=False, skipped_reason="fund_mismatch"
                )

            if not invite.is_pending:
                logfire.info(
                    "Reminder skipped, invite no longer pending",
                    invite_id=str(invite.id),
                    status=invite.status.value,
                )
                return SendInviteReminderResponse(
                    sent=False, skipped_reason=invite.status.value
                )

            context = await self.invite_service.describe_invite(invite)
            try:
                message_id = await self.notification_service.send_team_invite_reminder(
                    invite, context, request.now
                )
            except Exception as e:
                raise DependencyFailureError(
                    f"Failed to send invite reminder: {e}"
                ) from e

            logfire.info(
                "Invite reminder sent",
                invite_id=str(invite.id),
                reminder_type=request.reminder_type.value,
            )
            return SendInviteReminderResponse(sent=True, message_id=message_id)
