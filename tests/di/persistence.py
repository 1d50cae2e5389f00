"""Mock persistence providers for testing."""

from dishka import Scope, provide

from fundteam.domain.repository import (
    FundRepository,
    InvestorRepository,
    InviteRepository,
    UnitOfWork,
    UserRepository,
)
from fundteam.persistence.repository.inmemory import (
    InMemoryFundRepository,
    InMemoryInvestorRepository,
    InMemoryInviteRepository,
    InMemoryUnitOfWork,
    InMemoryUserRepository,
)
from fundteam.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across request scopes within one
    container. Each test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_investor_repository(self) -> InvestorRepository:
        """Provide in-memory investor profile repository."""
        return InMemoryInvestorRepository()

    @provide(scope=Scope.APP)
    def get_fund_repository(self) -> FundRepository:
        """Provide in-memory fund repository."""
        return InMemoryFundRepository()

    @provide(scope=Scope.APP)
    def get_invite_repository(self) -> InviteRepository:
        """Provide in-memory invite repository."""
        return InMemoryInviteRepository()

    @provide(scope=Scope.APP)
    def get_in_memory_unit_of_work(self) -> InMemoryUnitOfWork:
        """Provide the in-memory unit of work for test inspection."""
        return InMemoryUnitOfWork()

    @provide(scope=Scope.APP)
    def get_unit_of_work(self, unit_of_work: InMemoryUnitOfWork) -> UnitOfWork:
        """Provide the in-memory unit of work."""
        return unit_of_work
