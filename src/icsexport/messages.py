"""User-facing messages for export failures."""

from icsexport.exceptions.errors import (
    DeliveryError,
    EmptyDocumentError,
    EventValidationError,
)

GENERIC_EXPORT_FAILURE = "Could not export to calendar. Please try again."


def get_user_friendly_error(error: Exception) -> str:
    """Convert an exception to a short message suitable for a front end.

    Args:
        error: The exception to convert.

    Returns:
        A user-friendly error message string.
    """
    if isinstance(error, EventValidationError):
        field_label = error.field_name.replace("_", " ")
        problem = error.reason.split(" ")[0]
        return f"Event '{error.event_title}' could not be exported: its {field_label} is {problem}."

    if isinstance(error, EmptyDocumentError):
        return "There are no events to export."

    if isinstance(error, DeliveryError):
        return f"Could not save {error.filename}. Please check the destination and try again."

    return GENERIC_EXPORT_FAILURE
