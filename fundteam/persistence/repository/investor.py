"""PostgreSQL implementation of InvestorProfile repository."""

from sqlalchemy import and_, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from fundteam.domain.model import InvestorProfile
from fundteam.domain.repository import InvestorRepository
from fundteam.domain.value import FundId, UserId
from fundteam.persistence.mappers import investor_to_dict, row_to_investor
from fundteam.persistence.tables import investors_table


class PostgresInvestorRepository(InvestorRepository):
    """PostgreSQL implementation of InvestorRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_fund(
        self, user_id: UserId, fund_id: FundId
    ) -> InvestorProfile | None:
        """Find the investor profile for an account within a fund."""
        stmt = select(investors_table).where(
            and_(
                investors_table.c.user_id == user_id,
                investors_table.c.fund_id == fund_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_investor(dict(row)) if row else None

    async def save(self, profile: InvestorProfile) -> InvestorProfile:
        """Insert an investor profile.

        Raises:
            IntegrityError: If the account already has a profile in this fund
        """
        async with self.session.begin_nested():
            await self.session.execute(
                insert(investors_table).values(**investor_to_dict(profile))
            )
        return profile
