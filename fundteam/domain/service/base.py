"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services hold repositories and gateways and own one slice of the team
    lifecycle: membership, invites, reminders, notifications or sessions.
    Each public operation runs inside a ``logfire.span`` named after it.
    """
