"""Dispatch due reminders use case."""

from datetime import datetime, timedelta

import logfire
from pydantic import BaseModel

from fundteam.application.usecase.base import BaseUseCase
from fundteam.application.usecase.reminder.send_invite_reminder import (
    SendInviteReminderRequest,
    SendInviteReminderUseCase,
)
from fundteam.domain.service import ReminderScheduler

MAX_ATTEMPTS = 3
RETRY_BASE_DELAY = timedelta(minutes=1)


def retry_delay(attempt: int) -> timedelta:
    """Exponential backoff for the given zero-based attempt."""
    return RETRY_BASE_DELAY * (2**attempt)


class DispatchDueRemindersRequest(BaseModel):
    """Request to process reminders that are due."""

    now: datetime
    limit: int = 100


class DispatchDueRemindersResponse(BaseModel):
    """Counts from one dispatch pass."""

    claimed: int = 0
    sent: int = 0
    skipped: int = 0
    failed: int = 0
    retried: int = 0


class DispatchDueRemindersUseCase(BaseUseCase):
    """Use case run by the reminder worker.

    Claims due jobs and sends each reminder. A failed job is requeued with
    backoff until it has been tried ``MAX_ATTEMPTS`` times and never stops
    the rest of the batch.
    """

    def __init__(
        self,
        reminder_scheduler: ReminderScheduler,
        send_invite_reminder: SendInviteReminderUseCase,
    ) -> None:
        """Initialize use case.

        Args:
            reminder_scheduler: Reminder scheduler
            send_invite_reminder: Per-job reminder use case
        """
        self.reminder_scheduler = reminder_scheduler
        self.send_invite_reminder = send_invite_reminder

    async def execute(
        self, request: DispatchDueRemindersRequest
    ) -> DispatchDueRemindersResponse:
        """Execute dispatch due reminders use case.

        Args:
            request: Dispatch request

        Returns:
            Per-outcome counts
        """
        with logfire.span("dispatch_due_reminders", limit=request.limit):
            jobs = await self.reminder_scheduler.claim_due_reminders(
                request.now, request.limit
            )
            result = DispatchDueRemindersResponse(claimed=len(jobs))

            for job in jobs:
                try:
                    outcome = await self.send_invite_reminder.execute(
                        SendInviteReminderRequest(
                            invite_id=job.invite_id,
                            fund_id=job.fund_id,
                            reminder_type=job.type,
                            now=request.now,
                        )
                    )
                except Exception as e:
                    result.failed += 1
                    logfire.error(
                        "Reminder job failed",
                        job_id=job.job_id,
                        attempt=job.attempt,
                        error=str(e),
                    )
                    if job.attempt + 1 < MAX_ATTEMPTS:
                        run_at = request.now + retry_delay(job.attempt)
                        if await self.reminder_scheduler.retry_reminder(job, run_at):
                            result.retried += 1
                    continue

                if outcome.sent:
                    result.sent += 1
                else:
                    result.skipped += 1

            if jobs:
                logfire.info(
                    "Reminder dispatch finished",
                    claimed=result.claimed,
                    sent=result.sent,
                    skipped=result.skipped,
                    failed=result.failed,
                    retried=result.retried,
                )
            return result
