"""Errors raised by outbound adapters."""


class AdapterError(Exception):
    """Base error for calls leaving the process."""


class ProviderError(AdapterError):
    """A third-party service rejected or failed a request."""


class NotificationError(ProviderError):
    """An email could not be handed to the delivery service.

    Attributes:
        template: Template of the message that was not delivered
    """

    def __init__(self, message: str, template: str | None = None) -> None:
        self.template = template
        super().__init__(message)
