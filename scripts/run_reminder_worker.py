#!/usr/bin/env python3
"""Run the invite reminder worker.

Polls the reminder queue and sends reminder emails for invites that are
still pending. Exits immediately when no queue is configured.
"""

import asyncio
import os
import sys
from datetime import datetime, timezone

import logfire

from fundteam.application.usecase.reminder import (
    DispatchDueRemindersRequest,
    DispatchDueRemindersUseCase,
)
from fundteam.config import Settings
from fundteam.util.di.container import create_worker_container
from fundteam.util.logging import setup_logging
from fundteam.util.observability import configure_logfire

POLL_INTERVAL_SECONDS = 30
BATCH_SIZE = 100


async def run(poll_interval: float = POLL_INTERVAL_SECONDS) -> None:
    """Dispatch due reminders until cancelled.

    Each pass runs in its own request scope so database work is committed
    per batch.
    """
    container = create_worker_container()
    try:
        while True:
            async with container() as request_container:
                use_case = await request_container.get(DispatchDueRemindersUseCase)
                result = await use_case.execute(
                    DispatchDueRemindersRequest(
                        now=datetime.now(timezone.utc), limit=BATCH_SIZE
                    )
                )
            # A full batch means more jobs are probably due
            if result.claimed < BATCH_SIZE:
                await asyncio.sleep(poll_interval)
    finally:
        await container.close()


def main() -> int:
    """Start the worker and log any failure to Logfire."""
    os.environ.setdefault("DATABASE__APPLICATION_NAME", "fundteam-reminder-worker")
    settings = Settings()

    configure_logfire(settings, service_name="fundteam-reminder-worker")
    setup_logging(settings)

    if not settings.queue.available:
        logfire.warn("QUEUE__REDIS_URL not set, reminder worker has nothing to do")
        return 0

    try:
        logfire.info("Starting reminder worker", poll_interval=POLL_INTERVAL_SECONDS)
        asyncio.run(run())
        return 0
    except KeyboardInterrupt:
        logfire.info("Reminder worker stopped")
        return 0
    except Exception as e:
        logfire.error(
            "Reminder worker failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
