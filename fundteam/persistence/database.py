"""Async PostgreSQL engine and session factory.

Sessions span one request scope (an HTTP request or a worker batch).
Repositories wrap each write in a savepoint inside that transaction.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from fundteam.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL and pool sizing

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={
            "server_settings": {
                "application_name": settings.database.application_name
            }
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Objects stay readable after commit and nothing is flushed implicitly,
    so repositories decide exactly when SQL is sent.

    Args:
        engine: Database engine

    Returns:
        Session factory for request-scoped sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
