"""Base models for fund team entities."""

from datetime import datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Entities are frozen. A state change produces a new instance that the
    owning service hands to its repository.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,  # Allow custom value objects
    )


class TimestampedModel(DomainModel):
    """Entity that records when it was created and last changed."""

    created_at: datetime
    updated_at: datetime

    def changed(self, now: datetime, **changes: Any) -> Self:
        """Copy with ``changes`` applied and ``updated_at`` moved to ``now``."""
        return self.model_copy(update={**changes, "updated_at": now})
