"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fundteam.domain.model import User
from fundteam.domain.repository import UserRepository
from fundteam.domain.value import FundId, UserId
from fundteam.persistence.mappers import row_to_user, user_to_dict
from fundteam.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email."""
        stmt = select(users_table).where(users_table.c.email == email)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_fund(self, fund_id: FundId) -> list[User]:
        """List accounts bound to a fund."""
        stmt = (
            select(users_table)
            .where(users_table.c.fund_id == fund_id)
            .order_by(users_table.c.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Raises:
            IntegrityError: If another account already uses this email
        """
        user_dict = user_to_dict(user)

        existing = await self.find_by_id(user.id)

        async with self.session.begin_nested():
            if existing:
                stmt = (
                    update(users_table)
                    .where(users_table.c.id == user.id)
                    .values(**user_dict)
                )
            else:
                stmt = insert(users_table).values(**user_dict)
            await self.session.execute(stmt)

        return user

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user account."""
        async with self.session.begin_nested():
            result = await self.session.execute(
                delete(users_table).where(users_table.c.id == user_id)
            )
        return result.rowcount > 0
