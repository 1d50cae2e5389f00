"""Notification domain service for team invite emails."""

import math
from datetime import datetime

import logfire

from fundteam.config import Settings
from fundteam.domain.model import Invite
from fundteam.domain.value.common import ValueObject

from .base import Service
from .email_templates import (
    RenderedEmail,
    render_team_invite,
    render_team_invite_reminder,
)
from .invite_service import UNKNOWN_INVITER_NAME, InviteContext


class EmailMessage(ValueObject):
    """Outbound email."""

    to: str
    subject: str
    html: str
    text: str


class EmailClient:
    """Transactional email gateway interface."""

    async def send(self, message: EmailMessage) -> str:
        """Deliver an email.

        Args:
            message: The email to send

        Returns:
            Gateway message ID

        Raises:
            EmailDeliveryError: If the gateway rejects or fails to deliver the message
        """
        raise NotImplementedError


def days_until(expires_at: datetime, now: datetime) -> int:
    """Whole days left until ``expires_at``, rounded up, never negative."""
    seconds = (expires_at - now).total_seconds()
    return max(0, math.ceil(seconds / 86400))


class NotificationService(Service):
    """Domain service that renders and sends invite emails."""

    def __init__(self, email_client: EmailClient, settings: Settings) -> None:
        """Initialize notification service.

        Args:
            email_client: Email gateway
            settings: Application settings (acceptance link base, expiry window)
        """
        self.email_client = email_client
        self.settings = settings

    def accept_invite_url(self, invite: Invite) -> str:
        """Acceptance link for an invite."""
        return self.settings.accept_invite_url(invite.token.root)

    async def send_team_invite(self, invite: Invite, context: InviteContext) -> str:
        """Send the invitation email for a newly created invite.

        Args:
            invite: The invite
            context: Fund and inviter display data

        Returns:
            Gateway message ID

        Raises:
            EmailDeliveryError: If delivery fails
        """
        with logfire.span(
            "notification_service.send_team_invite", invite_id=str(invite.id)
        ):
            rendered = render_team_invite(
                fund_name=context.fund_name,
                platform_name=context.platform_name,
                role=invite.role,
                inviter_name=context.invited_by_name,
                inviter_email=context.invited_by_email,
                accept_url=self.accept_invite_url(invite),
                expires_in_days=self.settings.invitations.expiry_days,
            )
            return await self._send(invite, rendered)

    async def send_team_invite_reminder(
        self, invite: Invite, context: InviteContext, now: datetime
    ) -> str:
        """Send a reminder for a pending invite.

        Args:
            invite: The invite
            context: Fund and inviter display data
            now: Current instant, used for the days-remaining count

        Returns:
            Gateway message ID

        Raises:
            EmailDeliveryError: If delivery fails
        """
        days_remaining = days_until(invite.expires_at, now)
        with logfire.span(
            "notification_service.send_team_invite_reminder",
            invite_id=str(invite.id),
            days_remaining=days_remaining,
        ):
            rendered = render_team_invite_reminder(
                fund_name=context.fund_name,
                platform_name=context.platform_name,
                role=invite.role,
                inviter_name=context.inviter_full_name or UNKNOWN_INVITER_NAME,
                accept_url=self.accept_invite_url(invite),
                days_remaining=days_remaining,
            )
            return await self._send(invite, rendered)

    async def _send(self, invite: Invite, rendered: RenderedEmail) -> str:
        subject = rendered.subject
        message = EmailMessage(
            to=invite.email, subject=subject, html=rendered.html, text=rendered.text
        )
        try:
            message_id = await self.email_client.send(message)
        except Exception as e:
            logfire.error(
                "Failed to send invite email",
                invite_id=str(invite.id),
                subject=subject,
                error=str(e),
            )
            raise
        logfire.info(
            "Invite email sent",
            invite_id=str(invite.id),
            subject=subject,
            message_id=message_id,
        )
        return message_id
