"""SQLAlchemy session unit of work."""

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from fundteam.domain.repository import UnitOfWork


class SessionUnitOfWork(UnitOfWork):
    """Commits the request's database session."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize unit of work.

        Args:
            session: The request's SQLAlchemy async session
        """
        self.session = session

    async def commit(self) -> None:
        """Commit the session's open transaction."""
        await self.session.commit()
        logfire.info("Unit of work committed")
