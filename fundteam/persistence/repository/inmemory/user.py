"""In-memory user repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from fundteam.domain.model.user import User
from fundteam.domain.repository.user import UserRepository
from fundteam.domain.value import FundId, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_fund(self, fund_id: FundId) -> list[User]:
        """List accounts bound to a fund."""
        members = [user for user in self._users.values() if user.fund_id == fund_id]
        return sorted(members, key=lambda user: user.created_at)

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Raises:
            IntegrityError: If another account already uses this email
        """
        existing = await self.find_by_email(user.email)
        if existing and existing.id != user.id:
            raise IntegrityError("Duplicate user email", None, Exception())

        self._users[user.id] = user
        return user

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user account."""
        return self._users.pop(user_id, None) is not None
