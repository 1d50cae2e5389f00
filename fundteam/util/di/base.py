"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

Component = Literal["persistence", "queue", "email"]


class ProviderBase(Provider):
    """Base for all DI providers.

    A mockable component declares a base provider carrying
    ``__mock_component__`` with one production and one mock subclass.
    Config, domain and application providers have no subclasses and are
    always used as-is.

    Attributes:
        __mock_component__: Component name, or None for concrete providers
        __is_mock__: Whether this is a mock implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
