"""Exceptions raised while decoding webhook deliveries."""


class DecodeError(Exception):
    """Raised when a webhook delivery cannot be decoded into an event."""

    def __init__(self, message: str, event_name: str | None = None) -> None:
        """Initializes the exception with the offending event name."""
        super().__init__(message)
        self.event_name = event_name


class WebhookSignatureError(Exception):
    """Raised when a delivery's signature is missing or does not match the shared secret."""

    pass
