"""Infrastructure providers."""

# Import bases
from .email import EmailProvider
from .persistence import PersistenceProvider
from .queue import QueueProvider

# Import implementations (needed for __subclasses__())
from .email import ProdEmailProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .queue import ProdQueueProvider  # noqa: F401

__all__ = [
    "EmailProvider",
    "PersistenceProvider",
    "ProdEmailProvider",
    "ProdPersistenceProvider",
    "ProdQueueProvider",
    "QueueProvider",
]
