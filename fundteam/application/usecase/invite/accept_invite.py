"""Accept team invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from fundteam.application.usecase.base import BaseUseCase, CamelModel
from fundteam.domain.repository import UnitOfWork
from fundteam.domain.service import InviteService, JWTService, ReminderScheduler
from fundteam.domain.value import TeamRole


class AcceptTeamInviteRequest(BaseModel):
    """Request to accept an invite."""

    token: str
    now: datetime
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class AcceptedUserItem(CamelModel):
    """Account that resulted from accepting an invite."""

    id: str
    email: str
    role: TeamRole | None
    fund_id: str | None


class AcceptTeamInviteResponse(CamelModel):
    """Response after accepting an invite.

    Tokens are only issued to newly created accounts. Existing users sign
    in separately.
    """

    success: bool = True
    user: AcceptedUserItem
    access_token: str | None = None
    refresh_token: str | None = None
    is_existing_user: bool


class AcceptTeamInviteUseCase(BaseUseCase):
    """Use case for accepting a team invite."""

    def __init__(
        self,
        invite_service: InviteService,
        reminder_scheduler: ReminderScheduler,
        jwt_service: JWTService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
            reminder_scheduler: Reminder scheduler
            jwt_service: JWT service for new-account sessions
            unit_of_work: Commits the acceptance before reminders are cancelled
        """
        self.invite_service = invite_service
        self.reminder_scheduler = reminder_scheduler
        self.jwt_service = jwt_service
        self.unit_of_work = unit_of_work

    async def execute(
        self, request: AcceptTeamInviteRequest
    ) -> AcceptTeamInviteResponse:
        """Execute accept team invite use case.

        Args:
            request: Accept invite request

        Returns:
            The resulting account and, for new accounts, session tokens

        Raises:
            NotFoundError: If the token is unknown
            ExpiredError: If the invite has expired
            AlreadyUsedError: If the invite was already accepted or cancelled
            ValidationError: If a new user omitted password or names
            DependencyFailureError: If the new account could not be completed
        """
        with logfire.span("accept_team_invite", token=request.token[:8] + "..."):
            accepted = await self.invite_service.accept_invite(
                token=request.token,
                now=request.now,
                password=request.password,
                first_name=request.first_name,
                last_name=request.last_name,
            )
            await self.unit_of_work.commit()

            await self.reminder_scheduler.cancel_reminders(accepted.invite.id)

            user = accepted.user
            response = AcceptTeamInviteResponse(
                user=AcceptedUserItem(
                    id=str(user.id),
                    email=user.email,
                    role=user.role,
                    fund_id=str(user.fund_id) if user.fund_id else None,
                ),
                is_existing_user=accepted.is_existing_user,
            )

            if not accepted.is_existing_user:
                tokens = self.jwt_service.create_session(user, request.now)
                response.access_token = tokens.access_token
                response.refresh_token = tokens.refresh_token

            return response
