"""Invite use cases."""

from fundteam.application.usecase.invite.accept_invite import (
    AcceptTeamInviteRequest,
    AcceptTeamInviteResponse,
    AcceptTeamInviteUseCase,
)
from fundteam.application.usecase.invite.cancel_invite import (
    CancelTeamInviteRequest,
    CancelTeamInviteResponse,
    CancelTeamInviteUseCase,
)
from fundteam.application.usecase.invite.create_invite import (
    CreateTeamInviteRequest,
    CreateTeamInviteResponse,
    CreateTeamInviteUseCase,
    InviteItem,
)
from fundteam.application.usecase.invite.resend_invite import (
    ResendTeamInviteRequest,
    ResendTeamInviteResponse,
    ResendTeamInviteUseCase,
)
from fundteam.application.usecase.invite.verify_invite import (
    VerifyInviteRequest,
    VerifyInviteResponse,
    VerifyInviteUseCase,
)

__all__ = [
    "AcceptTeamInviteRequest",
    "AcceptTeamInviteResponse",
    "AcceptTeamInviteUseCase",
    "CancelTeamInviteRequest",
    "CancelTeamInviteResponse",
    "CancelTeamInviteUseCase",
    "CreateTeamInviteRequest",
    "CreateTeamInviteResponse",
    "CreateTeamInviteUseCase",
    "InviteItem",
    "ResendTeamInviteRequest",
    "ResendTeamInviteResponse",
    "ResendTeamInviteUseCase",
    "VerifyInviteRequest",
    "VerifyInviteResponse",
    "VerifyInviteUseCase",
]
