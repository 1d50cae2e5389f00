"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class DependencyInjectionError(UtilError):
    """Dependency injection error."""

    pass


class PasswordHashError(UtilError):
    """Password could not be hashed or checked."""

    pass
