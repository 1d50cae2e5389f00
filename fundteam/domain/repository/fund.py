"""Fund repository interface."""

from abc import ABC, abstractmethod

from fundteam.domain.model.fund import Fund
from fundteam.domain.value import FundId


class FundRepository(ABC):
    """Repository for funds."""

    @abstractmethod
    async def find_by_id(self, fund_id: FundId) -> Fund | None:
        """Find a fund by ID.

        Args:
            fund_id: The fund's unique identifier

        Returns:
            The fund if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, fund: Fund) -> Fund:
        """Save a fund (create or update).

        Args:
            fund: The fund to save

        Returns:
            The saved fund
        """
        pass
