"""Remove member use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from fundteam.application.usecase.base import BaseUseCase, CamelModel
from fundteam.domain.error import ForbiddenError
from fundteam.domain.service import MembershipService
from fundteam.domain.value import UserId


class RemoveMemberRequest(BaseModel):
    """Request to remove a member from the caller's fund."""

    caller_id: UUID
    user_id: UUID
    now: datetime


class RemoveMemberResponse(CamelModel):
    """Response after removing a member."""

    success: bool = True


class RemoveMemberUseCase(BaseUseCase):
    """Use case for detaching a member from the caller's fund."""

    def __init__(self, membership_service: MembershipService) -> None:
        self.membership_service = membership_service

    async def execute(self, request: RemoveMemberRequest) -> RemoveMemberResponse:
        """Execute remove member use case.

        The account is kept; only its fund binding is cleared.

        Raises:
            ForbiddenError: If the caller is not a manager, targets themselves,
                or targets a member of another fund
            NotFoundError: If the member does not exist
        """
        with logfire.span("remove_member", user_id=str(request.user_id)):
            manager = await self.membership_service.require_manager(
                UserId(request.caller_id), "remove team members"
            )
            if request.user_id == request.caller_id:
                logfire.warn("Attempt to remove self", user_id=str(manager.id))
                raise ForbiddenError("You cannot remove yourself")

            await self.membership_service.remove_member(
                UserId(request.user_id), manager.fund_id, request.now
            )
            return RemoveMemberResponse()
