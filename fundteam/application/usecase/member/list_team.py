"""List team use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from fundteam.application.usecase.base import BaseUseCase, CamelModel
from fundteam.application.usecase.invite.create_invite import InviteItem
from fundteam.domain.model import User
from fundteam.domain.service import InviteService, MembershipService
from fundteam.domain.value import TeamRole, UserId


class ListTeamRequest(BaseModel):
    """Request for the caller's team."""

    caller_id: UUID


class MemberItem(CamelModel):
    """Team member in API responses."""

    id: str
    email: str
    first_name: str | None
    last_name: str | None
    role: TeamRole | None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "MemberItem":
        return cls(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            created_at=user.created_at,
        )


class ListTeamResponse(CamelModel):
    """Team members and outstanding invites."""

    members: list[MemberItem]
    pending_invites: list[InviteItem]


class ListTeamUseCase(BaseUseCase):
    """Use case for listing a fund's team.

    Investors are not part of the team listing; they only show up as
    pending invites until they accept.
    """

    def __init__(
        self, membership_service: MembershipService, invite_service: InviteService
    ) -> None:
        """Initialize use case.

        Args:
            membership_service: Membership domain service
            invite_service: Invite domain service
        """
        self.membership_service = membership_service
        self.invite_service = invite_service

    async def execute(self, request: ListTeamRequest) -> ListTeamResponse:
        """Execute list team use case.

        Raises:
            ForbiddenError: If the caller is not a fund manager
        """
        with logfire.span("list_team", caller_id=str(request.caller_id)):
            manager = await self.membership_service.require_manager(
                UserId(request.caller_id), "view the team"
            )
            members = await self.membership_service.list_members(manager.fund_id)
            invites = await self.invite_service.list_pending_invites(manager.fund_id)

            return ListTeamResponse(
                members=[
                    MemberItem.from_user(user)
                    for user in members
                    if user.role != TeamRole.INVESTOR
                ],
                pending_invites=[InviteItem.from_invite(i) for i in invites],
            )
