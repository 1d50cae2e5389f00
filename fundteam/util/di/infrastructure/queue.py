"""Reminder queue infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from redis.asyncio import Redis

from fundteam.adapter.redis import DisabledReminderQueue, RedisReminderQueue
from fundteam.config import Settings
from fundteam.domain.service import ReminderQueue
from fundteam.util.di.base import ProviderBase
from fundteam.util.observability import instrument_redis


class QueueProvider(ProviderBase):
    """Reminder queue component base."""

    __mock_component__ = "queue"


class ProdQueueProvider(QueueProvider):
    """Production reminder queue provider using Redis."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_reminder_queue(
        self, settings: Settings
    ) -> AsyncIterator[ReminderQueue]:
        """Provide reminder queue.

        Without a configured Redis URL the queue reports itself unavailable
        and reminders are skipped.
        """
        if not settings.queue.redis_url:
            logfire.warn("QUEUE__REDIS_URL not set, invite reminders disabled")
            yield DisabledReminderQueue()
            return

        instrument_redis()
        client = Redis.from_url(
            settings.queue.redis_url,
            socket_connect_timeout=settings.queue.connect_timeout_seconds,
            socket_timeout=settings.queue.socket_timeout_seconds,
        )
        try:
            yield RedisReminderQueue(client, key_prefix=settings.queue.key_prefix)
        finally:
            await client.aclose()
