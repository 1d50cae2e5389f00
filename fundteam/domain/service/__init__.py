"""Domain services."""

from .base import Service
from .invite_service import (
    AcceptedInvite,
    InviteContext,
    InviteService,
    InviteVerification,
    ResentInvite,
)
from .jwt_service import JWTService, SessionTokens
from .membership_service import MembershipService, normalize_email
from .notification_service import EmailClient, EmailMessage, NotificationService
from .reminder_scheduler import ReminderQueue, ReminderScheduler

__all__ = [
    "AcceptedInvite",
    "EmailClient",
    "EmailMessage",
    "InviteContext",
    "InviteService",
    "InviteVerification",
    "JWTService",
    "MembershipService",
    "NotificationService",
    "ReminderQueue",
    "ReminderScheduler",
    "ResentInvite",
    "Service",
    "SessionTokens",
    "normalize_email",
]
