"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from fundteam.domain.model.user import User
from fundteam.domain.value import FundId, UserId


class UserRepository(ABC):
    """Repository for user accounts.

    Defines the contract for account persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_fund(self, fund_id: FundId) -> list[User]:
        """List accounts bound to a fund.

        Args:
            fund_id: The fund's unique identifier

        Returns:
            Accounts ordered by creation time
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            IntegrityError: If another account already uses this email
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete a user account.

        Args:
            user_id: The user's unique identifier

        Returns:
            True if an account was deleted, False if none existed
        """
        pass
