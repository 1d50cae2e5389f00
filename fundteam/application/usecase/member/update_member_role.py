"""Update member role use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from fundteam.application.usecase.base import BaseUseCase, CamelModel
from fundteam.domain.error import ForbiddenError
from fundteam.domain.service import MembershipService
from fundteam.domain.value import TeamRole, UserId


class UpdateMemberRoleRequest(BaseModel):
    """Request to change a member's role."""

    caller_id: UUID
    user_id: UUID
    role: TeamRole
    now: datetime


class UpdateMemberRoleResponse(CamelModel):
    """Response after changing a member's role."""

    success: bool = True


class UpdateMemberRoleUseCase(BaseUseCase):
    """Use case for changing the role of another member of the caller's fund."""

    def __init__(self, membership_service: MembershipService) -> None:
        self.membership_service = membership_service

    async def execute(
        self, request: UpdateMemberRoleRequest
    ) -> UpdateMemberRoleResponse:
        """Execute update member role use case.

        Raises:
            ForbiddenError: If the caller is not a manager, targets themselves,
                or targets a member of another fund
            NotFoundError: If the member does not exist
        """
        with logfire.span(
            "update_member_role",
            user_id=str(request.user_id),
            role=request.role.value,
        ):
            manager = await self.membership_service.require_manager(
                UserId(request.caller_id), "change member roles"
            )
            if request.user_id == request.caller_id:
                logfire.warn("Attempt to change own role", user_id=str(manager.id))
                raise ForbiddenError("You cannot change your own role")

            await self.membership_service.update_member_role(
                UserId(request.user_id), manager.fund_id, request.role, request.now
            )
            return UpdateMemberRoleResponse()
