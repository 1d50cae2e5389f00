"""Create team invite use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from fundteam.application.usecase.base import BaseUseCase, CamelModel
from fundteam.domain.model import Invite
from fundteam.domain.repository import UnitOfWork
from fundteam.domain.service import (
    InviteService,
    MembershipService,
    NotificationService,
    ReminderScheduler,
)
from fundteam.domain.value import InviteStatus, TeamRole, UserId
from fundteam.util.token import TokenGenerator


class CreateTeamInviteRequest(BaseModel):
    """Request to invite someone to the caller's fund."""

    caller_id: UUID
    email: str
    role: TeamRole
    now: datetime


class InviteItem(CamelModel):
    """Invite in API responses. Never carries the token."""

    id: str
    email: str
    role: TeamRole
    status: InviteStatus
    expires_at: datetime
    created_at: datetime

    @classmethod
    def from_invite(cls, invite: Invite) -> "InviteItem":
        return cls(
            id=str(invite.id),
            email=invite.email,
            role=invite.role,
            status=invite.status,
            expires_at=invite.expires_at,
            created_at=invite.created_at,
        )


class CreateTeamInviteResponse(CamelModel):
    """Response after creating an invite.

    ``email_error`` is set when the invite was created but the invitation
    email could not be sent.
    """

    invite: InviteItem
    invite_url: str
    email_sent: bool
    email_error: str | None = None


class CreateTeamInviteUseCase(BaseUseCase):
    """Use case for inviting a team member.

    Creates and commits the invite, then schedules reminders and sends the
    invitation email. Neither follow-up can fail the request.
    """

    def __init__(
        self,
        membership_service: MembershipService,
        invite_service: InviteService,
        reminder_scheduler: ReminderScheduler,
        notification_service: NotificationService,
        token_generator: TokenGenerator,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize use case.

        Args:
            membership_service: Membership domain service
            invite_service: Invite domain service
            reminder_scheduler: Reminder scheduler
            notification_service: Email notifications
            token_generator: Invite token source
            unit_of_work: Commits the invite before its side effects
        """
        self.membership_service = membership_service
        self.invite_service = invite_service
        self.reminder_scheduler = reminder_scheduler
        self.notification_service = notification_service
        self.token_generator = token_generator
        self.unit_of_work = unit_of_work

    async def execute(
        self, request: CreateTeamInviteRequest
    ) -> CreateTeamInviteResponse:
        """Execute create team invite use case.

        Args:
            request: Create invite request

        Returns:
            The created invite, its acceptance URL and email outcome

        Raises:
            ForbiddenError: If the caller is not a fund manager
            ConflictError: If the email is already a member or already invited
        """
        with logfire.span("create_team_invite", role=request.role.value):
            manager = await self.membership_service.require_manager(
                UserId(request.caller_id), "invite team members"
            )

            invite = await self.invite_service.create_invite(
                email=request.email,
                fund_id=manager.fund_id,
                role=request.role,
                invited_by_user_id=manager.id,
                now=request.now,
                token_generator=self.token_generator,
            )
            await self.unit_of_work.commit()

            await self.reminder_scheduler.schedule_reminders(
                invite.id, invite.fund_id, request.now
            )

            email_error = None
            try:
                context = await self.invite_service.describe_invite(invite)
                await self.notification_service.send_team_invite(invite, context)
            except Exception as e:
                email_error = str(e) or type(e).__name__
                logfire.warn(
                    "Invite created but invitation email failed",
                    invite_id=str(invite.id),
                    error=email_error,
                )

            return CreateTeamInviteResponse(
                invite=InviteItem.from_invite(invite),
                invite_url=self.notification_service.accept_invite_url(invite),
                email_sent=email_error is None,
                email_error=email_error,
            )
