"""Reminder use cases."""

from fundteam.application.usecase.reminder.dispatch_due_reminders import (
    MAX_ATTEMPTS,
    DispatchDueRemindersRequest,
    DispatchDueRemindersResponse,
    DispatchDueRemindersUseCase,
)
from fundteam.application.usecase.reminder.send_invite_reminder import (
    SendInviteReminderRequest,
    SendInviteReminderResponse,
    SendInviteReminderUseCase,
)

__all__ = [
    "MAX_ATTEMPTS",
    "DispatchDueRemindersRequest",
    "DispatchDueRemindersResponse",
    "DispatchDueRemindersUseCase",
    "SendInviteReminderRequest",
    "SendInviteReminderResponse",
    "SendInviteReminderUseCase",
]
