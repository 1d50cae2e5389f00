"""PostgreSQL implementation of Fund repository."""

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fundteam.domain.model import Fund
from fundteam.domain.repository import FundRepository
from fundteam.domain.value import FundId
from fundteam.persistence.mappers import fund_to_dict, row_to_fund
from fundteam.persistence.tables import funds_table


class PostgresFundRepository(FundRepository):
    """PostgreSQL implementation of FundRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, fund_id: FundId) -> Fund | None:
        """Find a fund by ID."""
        stmt = select(funds_table).where(funds_table.c.id == fund_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_fund(dict(row)) if row else None

    async def save(self, fund: Fund) -> Fund:
        """Save a fund (create or update)."""
        fund_dict = fund_to_dict(fund)
        if await self.find_by_id(fund.id):
            stmt = (
                update(funds_table)
                .where(funds_table.c.id == fund.id)
                .values(**fund_dict)
            )
        else:
            stmt = insert(funds_table).values(**fund_dict)
        await self.session.execute(stmt)
        await self.session.flush()
        return fund
