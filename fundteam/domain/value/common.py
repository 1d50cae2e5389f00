"""Base classes for value objects."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel


class ValueObject(BaseModel):
    """Immutable value compared field by field.

    Used for reminder jobs, email messages and service results that carry
    no identity of their own.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Validated wrapper around a single primitive.

    The primitive is available as ``.root``. Repositories store that, so
    the wrapper never reaches the database layer.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
