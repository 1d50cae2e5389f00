"""Redis reminder queue adapter."""

from .queue import DisabledReminderQueue, InMemoryReminderQueue, RedisReminderQueue

__all__ = ["DisabledReminderQueue", "InMemoryReminderQueue", "RedisReminderQueue"]
