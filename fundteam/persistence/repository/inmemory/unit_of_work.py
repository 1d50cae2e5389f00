"""In-memory unit of work for testing."""

from fundteam.domain.repository.unit_of_work import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """Counts commits. In-memory writes are visible immediately."""

    def __init__(self) -> None:
        self.commits = 0

    async def commit(self) -> None:
        """Record a commit."""
        self.commits += 1
