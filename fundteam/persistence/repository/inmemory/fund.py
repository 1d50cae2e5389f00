"""In-memory fund repository for testing."""

from fundteam.domain.model.fund import Fund
from fundteam.domain.repository.fund import FundRepository
from fundteam.domain.value import FundId


class InMemoryFundRepository(FundRepository):
    """In-memory implementation of FundRepository for testing."""

    def __init__(self) -> None:
        self._funds: dict[FundId, Fund] = {}

    async def find_by_id(self, fund_id: FundId) -> Fund | None:
        """Find a fund by ID."""
        return self._funds.get(fund_id)

    async def save(self, fund: Fund) -> Fund:
        """Save a fund (create or update)."""
        self._funds[fund.id] = fund
        return fund
