"""In-memory repository implementations for testing."""

from .fund import InMemoryFundRepository
from .investor import InMemoryInvestorRepository
from .invite import InMemoryInviteRepository
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryFundRepository",
    "InMemoryInvestorRepository",
    "InMemoryInviteRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
]
