"""Exceptions raised by Tracker Clients."""


class TrackerCallFailure(Exception):
    """Raised when a call to the tracker fails for any reason."""

    def __init__(self, operation: str, message: str, status_code: int | None = None) -> None:
        """Initializes the exception with the failed operation and HTTP status."""
        super().__init__(f"Tracker call {operation} failed: {message}")
        self.operation = operation
        self.status_code = status_code
