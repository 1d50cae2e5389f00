"""In-memory investor profile repository for testing."""

from sqlalchemy.exc import IntegrityError

from fundteam.domain.model.investor import InvestorProfile
from fundteam.domain.repository.investor import InvestorRepository
from fundteam.domain.value import FundId, UserId


class InMemoryInvestorRepository(InvestorRepository):
    """In-memory implementation of InvestorRepository for testing."""

    def __init__(self) -> None:
        self._profiles: list[InvestorProfile] = []

    async def find_by_user_and_fund(
        self, user_id: UserId, fund_id: FundId
    ) -> InvestorProfile | None:
        """Find the investor profile for an account within a fund."""
        for profile in self._profiles:
            if profile.user_id == user_id and profile.fund_id == fund_id:
                return profile
        return None

    async def save(self, profile: InvestorProfile) -> InvestorProfile:
        """Insert an investor profile.

        Raises:
            IntegrityError: If the account already has a profile in this fund
        """
        if await self.find_by_user_and_fund(profile.user_id, profile.fund_id):
            raise IntegrityError("Duplicate investor profile", None, Exception())
        self._profiles.append(profile)
        return profile
