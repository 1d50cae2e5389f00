"""Reminder scheduling domain service.

Turns invite lifecycle events into delayed-job schedule and cancel calls.
Reminders are a courtesy: a queue outage or error is logged here and never
reaches the caller, so invite operations succeed regardless.
"""

import asyncio
from datetime import datetime, timedelta

import logfire

from fundteam.config import InvitationSettings
from fundteam.domain.value import (
    FundId,
    InviteId,
    ReminderJob,
    ReminderType,
    reminder_job_id,
)

from .base import Service


class ReminderQueue:
    """Delayed job queue interface for invite reminders."""

    @property
    def available(self) -> bool:
        """Whether the queue backend is configured and usable."""
        raise NotImplementedError

    async def schedule(self, job: ReminderJob, run_at: datetime) -> str:
        """Enqueue a job to run at ``run_at``, replacing any job with the same ID.

        Args:
            job: Reminder job
            run_at: Instant at which the job becomes due

        Returns:
            The job ID
        """
        raise NotImplementedError

    async def cancel(self, job_id: str) -> bool:
        """Remove a scheduled job.

        Args:
            job_id: Deterministic job ID

        Returns:
            True if a job was removed
        """
        raise NotImplementedError

    async def pop_due(self, now: datetime, limit: int = 100) -> list[ReminderJob]:
        """Claim jobs due at or before ``now``.

        A claimed job is removed from the queue and is never handed to
        another caller.

        Args:
            now: Current instant
            limit: Maximum number of jobs to claim

        Returns:
            Claimed jobs, earliest first
        """
        raise NotImplementedError


class ReminderScheduler(Service):
    """Domain service scheduling day-3 and day-5 invite reminders."""

    def __init__(
        self, queue: ReminderQueue, invitation_settings: InvitationSettings
    ) -> None:
        """Initialize reminder scheduler.

        Args:
            queue: Delayed job queue
            invitation_settings: Reminder delays
        """
        self.queue = queue
        self.delays = {
            ReminderType.DAY_3: timedelta(days=invitation_settings.reminder_day_3),
            ReminderType.DAY_5: timedelta(days=invitation_settings.reminder_day_5),
        }

    async def schedule_reminders(
        self, invite_id: InviteId, fund_id: FundId, now: datetime
    ) -> None:
        """Schedule both reminders for an invite, anchored at ``now``.

        Never raises.

        Args:
            invite_id: Invite ID
            fund_id: Fund the invite belongs to
            now: Anchor instant for the reminder delays
        """
        with logfire.span(
            "reminder_scheduler.schedule_reminders",
            invite_id=str(invite_id),
            fund_id=str(fund_id),
        ):
            if not self.queue.available:
                logfire.warn(
                    "Reminder queue unavailable, skipping reminder scheduling",
                    invite_id=str(invite_id),
                )
                return

            jobs = [
                ReminderJob(
                    type=reminder_type,
                    invite_id=invite_id,
                    fund_id=fund_id,
                    scheduled_at=now,
                )
                for reminder_type in self.delays
            ]
            try:
                await asyncio.gather(
                    *(
                        self.queue.schedule(job, now + self.delays[job.type])
                        for job in jobs
                    )
                )
            except Exception as e:
                logfire.error(
                    "Failed to schedule invite reminders",
                    invite_id=str(invite_id),
                    error=str(e),
                )
                return

            logfire.info(
                "Invite reminders scheduled",
                invite_id=str(invite_id),
                job_ids=[job.job_id for job in jobs],
            )

    async def cancel_reminders(self, invite_id: InviteId) -> int:
        """Cancel every reminder type for an invite.

        Never raises.

        Args:
            invite_id: Invite ID

        Returns:
            Number of jobs cancelled
        """
        with logfire.span(
            "reminder_scheduler.cancel_reminders", invite_id=str(invite_id)
        ):
            if not self.queue.available:
                logfire.warn(
                    "Reminder queue unavailable, skipping reminder cancellation",
                    invite_id=str(invite_id),
                )
                return 0

            cancelled = 0
            for reminder_type in ReminderType:
                if await self._cancel(reminder_type, invite_id):
                    cancelled += 1

            logfire.info(
                "Invite reminders cancelled",
                invite_id=str(invite_id),
                cancelled=cancelled,
            )
            return cancelled

    async def cancel_specific_reminder(
        self, invite_id: InviteId, reminder_type: ReminderType
    ) -> bool:
        """Cancel one reminder for an invite.

        Never raises.

        Args:
            invite_id: Invite ID
            reminder_type: Which reminder to cancel

        Returns:
            True if a job was cancelled. False when nothing was scheduled
            or the queue is unavailable
        """
        with logfire.span(
            "reminder_scheduler.cancel_specific_reminder",
            invite_id=str(invite_id),
            reminder_type=reminder_type.value,
        ):
            if not self.queue.available:
                logfire.warn(
                    "Reminder queue unavailable, skipping reminder cancellation",
                    invite_id=str(invite_id),
                )
                return False
            return await self._cancel(reminder_type, invite_id)

    async def reschedule_reminders(
        self, invite_id: InviteId, fund_id: FundId, now: datetime
    ) -> None:
        """Drop existing reminders and schedule new ones anchored at ``now``."""
        await self.cancel_reminders(invite_id)
        await self.schedule_reminders(invite_id, fund_id, now)

    async def retry_reminder(self, job: ReminderJob, run_at: datetime) -> bool:
        """Put a failed reminder back on the queue for another attempt.

        Never raises.

        Args:
            job: The reminder that failed
            run_at: When to try again

        Returns:
            True if the retry was queued
        """
        if not self.queue.available:
            return False
        retry = job.model_copy(update={"attempt": job.attempt + 1})
        try:
            await self.queue.schedule(retry, run_at)
        except Exception as e:
            logfire.error(
                "Failed to requeue reminder", job_id=job.job_id, error=str(e)
            )
            return False
        logfire.info(
            "Reminder requeued",
            job_id=job.job_id,
            attempt=retry.attempt,
            run_at=run_at.isoformat(),
        )
        return True

    async def claim_due_reminders(
        self, now: datetime, limit: int = 100
    ) -> list[ReminderJob]:
        """Claim reminders that are due.

        Never raises. Returns nothing when the queue is unavailable.

        Args:
            now: Current instant
            limit: Maximum number of reminders to claim

        Returns:
            Claimed reminder jobs
        """
        with logfire.span("reminder_scheduler.claim_due_reminders", limit=limit):
            if not self.queue.available:
                return []
            try:
                jobs = await self.queue.pop_due(now, limit)
            except Exception as e:
                logfire.error("Failed to claim due reminders", error=str(e))
                return []
            if jobs:
                logfire.info("Due reminders claimed", count=len(jobs))
            return jobs

    async def _cancel(self, reminder_type: ReminderType, invite_id: InviteId) -> bool:
        job_id = reminder_job_id(reminder_type, invite_id)
        try:
            removed = await self.queue.cancel(job_id)
        except Exception as e:
            logfire.error("Failed to cancel reminder", job_id=job_id, error=str(e))
            return False
        if removed:
            logfire.info("Reminder cancelled", job_id=job_id)
        return removed
