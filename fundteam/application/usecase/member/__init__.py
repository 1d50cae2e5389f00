"""Team member use cases."""

from fundteam.application.usecase.member.list_team import (
    ListTeamRequest,
    ListTeamResponse,
    ListTeamUseCase,
    MemberItem,
)
from fundteam.application.usecase.member.remove_member import (
    RemoveMemberRequest,
    RemoveMemberResponse,
    RemoveMemberUseCase,
)
from fundteam.application.usecase.member.update_member_role import (
    UpdateMemberRoleRequest,
    UpdateMemberRoleResponse,
    UpdateMemberRoleUseCase,
)

__all__ = [
    "ListTeamRequest",
    "ListTeamResponse",
    "ListTeamUseCase",
    "MemberItem",
    "RemoveMemberRequest",
    "RemoveMemberResponse",
    "RemoveMemberUseCase",
    "UpdateMemberRoleRequest",
    "UpdateMemberRoleResponse",
    "UpdateMemberRoleUseCase",
]
