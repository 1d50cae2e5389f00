"""Stdlib logging for libraries that do not log through logfire."""

import logging
import sys

from fundteam.config import Settings

# Libraries that are chatty at INFO and already traced through logfire
QUIET_LOGGERS = ("httpx", "httpcore", "redis", "asyncpg", "sqlalchemy.engine")


def setup_logging(settings: Settings) -> None:
    """Configure root logging for the API and the reminder worker.

    Application events go through logfire. This only sets the level and
    format for records emitted by uvicorn, alembic and other libraries.

    Args:
        settings: Application settings
    """
    if settings.debug:
        level = logging.DEBUG
    elif settings.environment == "production":
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # SQL echo is driven by settings.debug on the engine itself
    quiet_level = logging.INFO if settings.debug else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

    logging.getLogger("fundteam").setLevel(level)
    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
