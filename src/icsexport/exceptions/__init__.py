"""Custom exceptions for icsexport."""

from icsexport.exceptions.errors import (
    ICSExportError,
    EventValidationError,
    EmptyDocumentError,
    DeliveryError,
    EmptyInputWarning,
)

__all__ = [
    "ICSExportError",
    "EventValidationError",
    "EmptyDocumentError",
    "DeliveryError",
    "EmptyInputWarning",
]
