"""Exception types raised by icsexport."""

from typing import Optional


class ICSExportError(Exception):
    """Base class for calendar export failures."""


class EventValidationError(ICSExportError):
    """Raised when an event cannot be serialized because of malformed input."""

    def __init__(
        self,
        field_name: str,
        event_title: Optional[str] = None,
        reason: str = "missing",
    ):
        self.field_name = field_name
        self.event_title = event_title or "Unknown"
        self.reason = reason
        super().__init__(
            f"Event '{self.event_title}' has invalid '{field_name}': {reason}"
        )


class EmptyDocumentError(ICSExportError):
    """Raised when delivery is attempted for an empty document."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Refusing to deliver empty calendar document as '{filename}'")


class DeliveryError(ICSExportError):
    """Raised when a sink fails to accept the calendar bytes."""

    def __init__(self, filename: str, message: str):
        self.filename = filename
        super().__init__(f"Failed to deliver '{filename}': {message}")


class EmptyInputWarning(UserWarning):
    """Category for a multi-event build that received no events."""
