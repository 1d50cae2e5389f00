"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class QueueError(AdapterError):
    """Delayed job queue error."""

    pass


class EmailDeliveryError(AdapterError):
    """Email gateway rejected or failed to deliver a message."""

    pass
