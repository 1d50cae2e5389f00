"""Invite routes."""

from datetime import datetime, timezone
from typing import Annotated
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import EmailStr, Field, field_validator

from fundteam.application.usecase.base import CamelModel
from fundteam.application.usecase.invite import (
    AcceptTeamInviteRequest,
    AcceptTeamInviteResponse,
    AcceptTeamInviteUseCase,
    CancelTeamInviteRequest,
    CancelTeamInviteResponse,
    CancelTeamInviteUseCase,
    CreateTeamInviteRequest,
    CreateTeamInviteResponse,
    CreateTeamInviteUseCase,
    ResendTeamInviteRequest,
    ResendTeamInviteResponse,
    ResendTeamInviteUseCase,
    VerifyInviteRequest,
    VerifyInviteResponse,
    VerifyInviteUseCase,
)
from fundteam.domain.service import JWTService
from fundteam.domain.value import TeamRole
from fundteam.interface.api.security import authenticate

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)

InviteTokenParam = Annotated[str, Field(min_length=64, max_length=64)]


def validate_password_strength(password: str) -> str:
    """Require 8+ characters mixing upper and lower case letters with a digit."""
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters")
    if len(password.encode()) > 72:
        raise ValueError("Password must be at most 72 bytes")
    if not any(c.isupper() for c in password):
        raise ValueError("Password must contain an uppercase letter")
    if not any(c.islower() for c in password):
        raise ValueError("Password must contain a lowercase letter")
    if not any(c.isdigit() for c in password):
        raise ValueError("Password must contain a number")
    return password


class CreateInviteAPIRequest(CamelModel):
    """API request for inviting a team member."""

    email: EmailStr
    role: TeamRole


class AcceptInviteAPIRequest(CamelModel):
    """API request for accepting an invite.

    Password and names are only required when no account exists for the
    invited email.
    """

    token: InviteTokenParam
    password: str | None = None
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return validate_password_strength(v)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@router.post(
    "", response_model=CreateTeamInviteResponse, status_code=status.HTTP_201_CREATED
)
async def create_invite(
    request: CreateInviteAPIRequest,
    create_invite_use_case: FromDishka[CreateTeamInviteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CreateTeamInviteResponse:
    """Invite someone to the caller's fund.

    Args:
        request: Email and role to invite
        create_invite_use_case: Create invite use case from DI
        jwt_service: JWT service from DI
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        The created invite. ``emailError`` is set if the email failed.
    """
    caller_id = authenticate(jwt_service, authorization, auth_token)
    return await create_invite_use_case.execute(
        CreateTeamInviteRequest(
            caller_id=caller_id,
            email=request.email,
            role=request.role,
            now=_now(),
        )
    )


@router.get(
    "/verify", response_model=VerifyInviteResponse, response_model_exclude_none=True
)
async def verify_invite(
    verify_invite_use_case: FromDishka[VerifyInviteUseCase],
    token: str = Query(min_length=64, max_length=64),
) -> VerifyInviteResponse:
    """Check an invite token. Public.

    Returns:
        ``valid`` with invite details, or ``valid=false`` with an error message
    """
    return await verify_invite_use_case.execute(
        VerifyInviteRequest(token=token, now=_now())
    )


@router.post("/accept", response_model=AcceptTeamInviteResponse)
async def accept_invite(
    request: AcceptInviteAPIRequest,
    accept_invite_use_case: FromDishka[AcceptTeamInviteUseCase],
) -> AcceptTeamInviteResponse:
    """Accept an invite. Public.

    Returns:
        The account and, for newly created accounts, session tokens
    """
    return await accept_invite_use_case.execute(
        AcceptTeamInviteRequest(
            token=request.token,
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
            now=_now(),
        )
    )


@router.post("/{invite_id}/resend", response_model=ResendTeamInviteResponse)
async def resend_invite(
    invite_id: UUID,
    resend_invite_use_case: FromDishka[ResendTeamInviteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ResendTeamInviteResponse:
    """Resend a pending invite with a fresh expiry."""
    caller_id = authenticate(jwt_service, authorization, auth_token)
    return await resend_invite_use_case.execute(
        ResendTeamInviteRequest(caller_id=caller_id, invite_id=invite_id, now=_now())
    )


@router.post("/{invite_id}/cancel", response_model=CancelTeamInviteResponse)
async def cancel_invite(
    invite_id: UUID,
    cancel_invite_use_case: FromDishka[CancelTeamInviteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CancelTeamInviteResponse:
    """Cancel a pending invite and its scheduled reminders."""
    caller_id = authenticate(jwt_service, authorization, auth_token)
    return await cancel_invite_use_case.execute(
        CancelTeamInviteRequest(caller_id=caller_id, invite_id=invite_id, now=_now())
    )
