#!/usr/bin/env python3
"""Upgrade the fund team schema to the latest Alembic revision."""

import sys

import logfire
from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory

from fundteam.config import Settings
from fundteam.util.observability import configure_logfire


def main() -> int:
    """Run migrations and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings, service_name="fundteam-migrations")

    alembic_cfg = Config("alembic.ini")
    head = ScriptDirectory.from_config(alembic_cfg).get_current_head()

    try:
        logfire.info("Starting database migrations", target_revision=head)
        command.upgrade(alembic_cfg, "head")
        logfire.info("Database migrations completed", revision=head)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            target_revision=head,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
