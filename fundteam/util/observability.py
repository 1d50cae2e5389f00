"""Observability configuration using Logfire.

Usage:
    import logfire

    # Structured logging
    logfire.info("Invite created", invite_id=str(invite.id), fund_id=str(fund_id))

    # Manual spans for critical operations
    with logfire.span("invite_service.accept_invite", token=token[:8] + "..."):
        ...

Never log a full invite token. Use the first 8 characters.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from fundteam.config import Settings


def configure_logfire(settings: Settings, service_name: str = "fundteam-api") -> None:
    """Configure Logfire for observability.

    Token Configuration:
    - Set OBSERVABILITY__LOGFIRE_TOKEN to enable cloud sending
    - Can be explicitly controlled with OBSERVABILITY__SEND_TO_LOGFIRE

    Args:
        settings: Application settings
        service_name: Name reported for this process (API or worker)
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs = {
        "service_name": service_name,
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        service_name=service_name,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        queue_available=settings.queue.available,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        """Attach method, path and client host to request spans."""
        result = {**attributes}
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            result["path"] = request.url.path
        if hasattr(request, "client") and request.client:
            result["client_host"] = request.client.host
        return result

    # Invite tokens travel in query strings and bodies, so headers are not captured
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Instrument outbound httpx calls (email gateway) with Logfire."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")


def instrument_redis() -> None:
    """Instrument Redis commands (reminder queue) with Logfire."""
    logfire.instrument_redis()
    logfire.info("Redis instrumented")
