"""Unit tests for the production reminder queue provider."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from fundteam.adapter.redis import DisabledReminderQueue, RedisReminderQueue
from fundteam.domain.service import ReminderQueue
from tests.di import build_test_container


class TestProdQueueProvider:
    """Tests for the Redis-backed queue provider."""

    @pytest.mark.asyncio
    async def test_redis_client_has_bounded_timeouts(self, monkeypatch):
        """The Redis client is built with connect and socket timeouts."""
        monkeypatch.setenv("QUEUE__REDIS_URL", "redis://redis:6379/0")
        monkeypatch.setenv("QUEUE__CONNECT_TIMEOUT_SECONDS", "1.5")
        client = MagicMock()
        client.aclose = AsyncMock()
        container = build_test_container(unmock={"queue"})

        with (
            patch(
                "fundteam.util.di.infrastructure.queue.Redis.from_url",
                return_value=client,
            ) as from_url,
            patch("fundteam.util.di.infrastructure.queue.instrument_redis"),
        ):
            queue = await container.get(ReminderQueue)
            await container.close()

        assert isinstance(queue, RedisReminderQueue)
        from_url.assert_called_once_with(
            "redis://redis:6379/0",
            socket_connect_timeout=1.5,
            socket_timeout=2.0,
        )
        client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_url_disables_queue(self, monkeypatch):
        """Without a Redis URL the provider yields a disabled queue."""
        monkeypatch.delenv("QUEUE__REDIS_URL", raising=False)
        container = build_test_container(unmock={"queue"})

        queue = await container.get(ReminderQueue)
        await container.close()

        assert isinstance(queue, DisabledReminderQueue)
        assert queue.available is False
