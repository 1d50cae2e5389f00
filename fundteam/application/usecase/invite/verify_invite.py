"""Verify invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from fundteam.application.usecase.base import BaseUseCase, CamelModel
from fundteam.domain.error import AlreadyUsedError, ExpiredError, NotFoundError
from fundteam.domain.service import InviteService
from fundteam.domain.value import TeamRole


class VerifyInviteRequest(BaseModel):
    """Request to check an invite token."""

    token: str
    now: datetime


class VerifiedInviteItem(CamelModel):
    """What the acceptance page shows about an invite."""

    email: str
    role: TeamRole
    fund_name: str
    invited_by_name: str
    expires_at: datetime


class VerifyInviteResponse(CamelModel):
    """Verification outcome. Invalid tokens are reported, not raised."""

    valid: bool
    invite: VerifiedInviteItem | None = None
    is_existing_user: bool | None = None
    error: str | None = None


class VerifyInviteUseCase(BaseUseCase):
    """Use case for checking an invite link before acceptance."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: VerifyInviteRequest) -> VerifyInviteResponse:
        """Execute verify invite use case.

        Args:
            request: Verify invite request

        Returns:
            Verification outcome
        """
        with logfire.span("verify_invite", token=request.token[:8] + "..."):
            try:
                verification = await self.invite_service.verify_token(
                    request.token, request.now
                )
            except (NotFoundError, ExpiredError, AlreadyUsedError) as e:
                return VerifyInviteResponse(valid=False, error=e.message)

            invite = verification.invite
            return VerifyInviteResponse(
                valid=True,
                invite=VerifiedInviteItem(
                    email=invite.email,
                    role=invite.role,
                    fund_name=verification.context.fund_name,
                    invited_by_name=verification.context.invited_by_name,
                    expires_at=invite.expires_at,
                ),
                is_existing_user=verification.is_existing_user,
            )
