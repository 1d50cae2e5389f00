"""Team member routes."""

from datetime import datetime, timezone
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header

from fundteam.application.usecase.base import CamelModel
from fundteam.application.usecase.member import (
    ListTeamRequest,
    ListTeamResponse,
    ListTeamUseCase,
    RemoveMemberRequest,
    RemoveMemberResponse,
    RemoveMemberUseCase,
    UpdateMemberRoleRequest,
    UpdateMemberRoleResponse,
    UpdateMemberRoleUseCase,
)
from fundteam.domain.service import JWTService
from fundteam.domain.value import TeamRole
from fundteam.interface.api.security import authenticate

router = APIRouter(prefix="/members", tags=["members"], route_class=DishkaRoute)


class UpdateRoleAPIRequest(CamelModel):
    """API request for changing a member's role."""

    role: TeamRole


@router.get("", response_model=ListTeamResponse)
async def list_team(
    list_team_use_case: FromDishka[ListTeamUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListTeamResponse:
    """List the caller's team members and pending invites."""
    caller_id = authenticate(jwt_service, authorization, auth_token)
    return await list_team_use_case.execute(ListTeamRequest(caller_id=caller_id))


@router.patch("/{user_id}/role", response_model=UpdateMemberRoleResponse)
async def update_member_role(
    user_id: UUID,
    request: UpdateRoleAPIRequest,
    update_member_role_use_case: FromDishka[UpdateMemberRoleUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> UpdateMemberRoleResponse:
    """Change another member's role."""
    caller_id = authenticate(jwt_service, authorization, auth_token)
    return await update_member_role_use_case.execute(
        UpdateMemberRoleRequest(
            caller_id=caller_id,
            user_id=user_id,
            role=request.role,
            now=datetime.now(timezone.utc),
        )
    )


@router.delete("/{user_id}", response_model=RemoveMemberResponse)
async def remove_member(
    user_id: UUID,
    remove_member_use_case: FromDishka[RemoveMemberUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> RemoveMemberResponse:
    """Remove a member from the caller's fund. The account is kept."""
    caller_id = authenticate(jwt_service, authorization, auth_token)
    return await remove_member_use_case.execute(
        RemoveMemberRequest(
            caller_id=caller_id, user_id=user_id, now=datetime.now(timezone.utc)
        )
    )
