"""Mock providers for testing."""

from .email import MockEmailProvider
from .persistence import MockPersistenceProvider
from .queue import MockQueueProvider
from .container import build_test_container

__all__ = [
    "MockEmailProvider",
    "MockPersistenceProvider",
    "MockQueueProvider",
    "build_test_container",
]
