#!/usr/bin/env python3
"""Start the fund team API with Logfire error tracking for startup errors."""

import sys

import logfire
import uvicorn

from fundteam.config import DEFAULT_JWT_SECRET, Settings
from fundteam.util.logging import setup_logging
from fundteam.util.observability import configure_logfire


def main() -> int:
    """Start the API server. Returns non-zero if startup is refused."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    if (
        settings.environment == "production"
        and settings.auth.jwt_secret == DEFAULT_JWT_SECRET
    ):
        logfire.error("Refusing to start: AUTH__JWT_SECRET is not set")
        return 1

    if not settings.queue.available:
        logfire.warn("QUEUE__REDIS_URL not set, invite reminders are disabled")

    try:
        logfire.info(
            "Starting fund team API",
            port=settings.port,
            base_url=settings.api.base_url,
        )

        uvicorn.run(
            "fundteam.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=True,
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
