"""PostgreSQL repository implementations."""

from fundteam.persistence.repository.fund import PostgresFundRepository
from fundteam.persistence.repository.investor import PostgresInvestorRepository
from fundteam.persistence.repository.invite import PostgresInviteRepository
from fundteam.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresFundRepository",
    "PostgresInvestorRepository",
    "PostgresInviteRepository",
    "PostgresUserRepository",
]
