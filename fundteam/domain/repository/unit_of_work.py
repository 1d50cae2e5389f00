"""Unit of work interface."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Commits the repositories' pending writes as one transaction.

    Use cases commit a state change before triggering side effects outside
    the store, such as queued reminders and emails.
    """

    @abstractmethod
    async def commit(self) -> None:
        """Commit pending writes.

        Raises:
            SQLAlchemyError: If the store rejects the commit
        """
        pass
