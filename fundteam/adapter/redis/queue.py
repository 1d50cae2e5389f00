"""Redis-backed delayed job queue for invite reminders.

Jobs live in two keys under a configurable prefix:
- ``{prefix}:jobs`` hash of job ID -> JSON payload
- ``{prefix}:due`` sorted set of job ID scored by due time (epoch seconds)

Scheduling an existing job ID overwrites both entries, so rescheduling
replaces the earlier job.
"""

import json
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import logfire
from redis.asyncio import Redis
from redis.exceptions import RedisError

from fundteam.adapter.error import QueueError
from fundteam.domain.service.reminder_scheduler import ReminderQueue
from fundteam.domain.value import FundId, InviteId, ReminderJob, ReminderType

# Claims due jobs atomically so two workers never receive the same job
POP_DUE_SCRIPT = """
local ids = redis.call('ZRANGEBYSCORE', KEYS[1], '-inf', ARGV[1], 'LIMIT', 0, tonumber(ARGV[2]))
local payloads = {}
for _, id in ipairs(ids) do
    redis.call('ZREM', KEYS[1], id)
    local payload = redis.call('HGET', KEYS[2], id)
    redis.call('HDEL', KEYS[2], id)
    if payload then
        table.insert(payloads, payload)
    end
end
return payloads
"""


def job_to_payload(job: ReminderJob) -> str:
    """Serialize a reminder job to its JSON payload."""
    return json.dumps(
        {
            "type": job.type.value,
            "inviteId": str(job.invite_id),
            "fundId": str(job.fund_id),
            "scheduledAt": job.scheduled_at.isoformat(),
            "attempt": job.attempt,
        }
    )


def payload_to_job(payload: str | bytes) -> ReminderJob:
    """Deserialize a JSON payload into a reminder job."""
    data: dict[str, Any] = json.loads(payload)
    return ReminderJob(
        type=ReminderType(data["type"]),
        invite_id=InviteId(UUID(data["inviteId"])),
        fund_id=FundId(UUID(data["fundId"])),
        scheduled_at=datetime.fromisoformat(data["scheduledAt"]),
        attempt=data.get("attempt", 0),
    )


def _score(instant: datetime) -> float:
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.timestamp()


class RedisReminderQueue(ReminderQueue):
    """Reminder queue stored in Redis."""

    def __init__(self, client: Redis, key_prefix: str) -> None:
        """Initialize Redis queue.

        Args:
            client: Async Redis client
            key_prefix: Prefix for the queue's keys
        """
        self.client = client
        self.jobs_key = f"{key_prefix}:jobs"
        self.due_key = f"{key_prefix}:due"
        self._pop_due = client.register_script(POP_DUE_SCRIPT)

    @property
    def available(self) -> bool:
        return True

    async def schedule(self, job: ReminderJob, run_at: datetime) -> str:
        """Store the job payload and its due time.

        Raises:
            QueueError: If Redis rejects the write
        """
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.hset(self.jobs_key, job.job_id, job_to_payload(job))
                pipe.zadd(self.due_key, {job.job_id: _score(run_at)})
                await pipe.execute()
        except RedisError as e:
            logfire.error("Redis schedule failed", job_id=job.job_id, error=str(e))
            raise QueueError(f"Failed to schedule job {job.job_id}: {e}") from e
        return job.job_id

    async def cancel(self, job_id: str) -> bool:
        """Remove a job's payload and due entry.

        Raises:
            QueueError: If Redis rejects the write
        """
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.hdel(self.jobs_key, job_id)
                pipe.zrem(self.due_key, job_id)
                removed_payload, removed_due = await pipe.execute()
        except RedisError as e:
            logfire.error("Redis cancel failed", job_id=job_id, error=str(e))
            raise QueueError(f"Failed to cancel job {job_id}: {e}") from e
        return bool(removed_payload or removed_due)

    async def pop_due(self, now: datetime, limit: int = 100) -> list[ReminderJob]:
        """Atomically claim due jobs.

        Raises:
            QueueError: If Redis fails
        """
        try:
            payloads = await self._pop_due(
                keys=[self.due_key, self.jobs_key], args=[_score(now), limit]
            )
        except RedisError as e:
            logfire.error("Redis pop_due failed", error=str(e))
            raise QueueError(f"Failed to claim due jobs: {e}") from e

        jobs = []
        for payload in payloads:
            try:
                jobs.append(payload_to_job(payload))
            except (ValueError, KeyError) as e:
                logfire.error("Dropping malformed reminder payload", error=str(e))
        return jobs


class DisabledReminderQueue(ReminderQueue):
    """Stand-in used when no queue backend is configured."""

    @property
    def available(self) -> bool:
        return False

    async def schedule(self, job: ReminderJob, run_at: datetime) -> str:
        raise QueueError("Reminder queue is not configured")

    async def cancel(self, job_id: str) -> bool:
        raise QueueError("Reminder queue is not configured")

    async def pop_due(self, now: datetime, limit: int = 100) -> list[ReminderJob]:
        raise QueueError("Reminder queue is not configured")


class InMemoryReminderQueue(ReminderQueue):
    """In-process reminder queue for tests.

    ``available`` can be flipped to simulate a missing backend and
    ``fail_with`` set to make every call raise.
    """

    def __init__(self, available: bool = True) -> None:
        self._available = available
        self.fail_with: Exception | None = None
        self.jobs: dict[str, tuple[ReminderJob, datetime]] = {}

    @property
    def available(self) -> bool:
        return self._available

    @available.setter
    def available(self, value: bool) -> None:
        self._available = value

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def schedule(self, job: ReminderJob, run_at: datetime) -> str:
        self._check()
        self.jobs[job.job_id] = (job, run_at)
        return job.job_id

    async def cancel(self, job_id: str) -> bool:
        self._check()
        return self.jobs.pop(job_id, None) is not None

    async def pop_due(self, now: datetime, limit: int = 100) -> list[ReminderJob]:
        self._check()
        due = sorted(
            (item for item in self.jobs.items() if item[1][1] <= now),
            key=lambda item: item[1][1],
        )[:limit]
        for job_id, _ in due:
            del self.jobs[job_id]
        return [job for _, (job, _) in due]

    def run_at(self, job_id: str) -> datetime | None:
        """Due time of a scheduled job, if present."""
        entry = self.jobs.get(job_id)
        return entry[1] if entry else None
