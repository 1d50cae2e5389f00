"""Repository interfaces for the fund team domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from fundteam.domain.repository.fund import FundRepository
from fundteam.domain.repository.investor import InvestorRepository
from fundteam.domain.repository.invite import InviteRepository
from fundteam.domain.repository.unit_of_work import UnitOfWork
from fundteam.domain.repository.user import UserRepository

__all__ = [
    "FundRepository",
    "InvestorRepository",
    "InviteRepository",
    "UnitOfWork",
    "UserRepository",
]
