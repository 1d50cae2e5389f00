"""Domain layer errors.

Each error carries a user-facing message. The HTTP boundary maps the
error class to a status code and returns the message verbatim.
"""


class DomainError(Exception):
    """Base domain error."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Input failed a domain rule (missing fields for a new account, etc)."""

    pass


class ConflictError(DomainError):
    """Operation would violate a uniqueness rule."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str, message: str | None = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(message or f"{resource} not found: {identifier}")


class ExpiredError(DomainError):
    """Raised when a pending invite is used after its expiry."""

    pass


class AlreadyUsedError(DomainError):
    """Raised when an accepted or cancelled invite is used again."""

    pass


class InvalidStateError(DomainError):
    """Raised when an operation requires a state the entity is not in."""

    pass


class ForbiddenError(DomainError):
    """Raised when the caller may not perform the operation."""

    pass


class DependencyFailureError(DomainError):
    """Raised when a collaborating store or gateway fails mid-operation."""

    pass
