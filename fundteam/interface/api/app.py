"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fundteam.config import Settings
from fundteam.interface.api.routes import health, invites, members
from fundteam.interface.error import register_error_handlers
from fundteam.util.di.container import create_container, setup_di
from fundteam.util.observability import instrument_fastapi


def create_app(
    container: AsyncContainer | None = None, instrument: bool = True
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use. Defaults to the production container.
        instrument: Whether to instrument the app with Logfire

    Returns:
        Configured application
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Fund Team API",
        description="Team invitations and membership for fund workspaces",
        version="0.1.0",
    )

    if instrument:
        instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(invites.router)
    app_instance.include_router(members.router)

    return app_instance
