"""Investor profile repository interface."""

from abc import ABC, abstractmethod

from fundteam.domain.model.investor import InvestorProfile
from fundteam.domain.value import FundId, UserId


class InvestorRepository(ABC):
    """Repository for investor profiles."""

    @abstractmethod
    async def find_by_user_and_fund(
        self, user_id: UserId, fund_id: FundId
    ) -> InvestorProfile | None:
        """Find the investor profile for an account within a fund.

        Args:
            user_id: The account's unique identifier
            fund_id: The fund's unique identifier

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, profile: InvestorProfile) -> InvestorProfile:
        """Save an investor profile.

        Args:
            profile: The profile to save

        Returns:
            The saved profile

        Raises:
            IntegrityError: If the account already has a profile in this fund
        """
        pass
