"""
icsexport - RFC 5545 calendar export for First Responder Connect events

Turns event rows into iCalendar (.ics) documents that Google Calendar,
Outlook and Apple Calendar can import, and hands the bytes to a sink.
"""

__version__ = "1.0.0"

# Public API - import commonly used components
from icsexport.config.settings import EXPORT_CONFIG, ExportConfig
from icsexport.exceptions.errors import (
    ICSExportError,
    EventValidationError,
    EmptyDocumentError,
    DeliveryError,
    EmptyInputWarning,
)
from icsexport.core.event_model import Event
from icsexport.core.ics_builder import build_single_event_document, build_multi_event_document
from icsexport.core.delivery import (
    DirectorySink,
    StreamSink,
    deliver_as_file,
    download_event_ics,
    download_events_ics,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "EXPORT_CONFIG",
    "ExportConfig",
    # Exceptions
    "ICSExportError",
    "EventValidationError",
    "EmptyDocumentError",
    "DeliveryError",
    "EmptyInputWarning",
    # Core
    "Event",
    "build_single_event_document",
    "build_multi_event_document",
    "DirectorySink",
    "StreamSink",
    "deliver_as_file",
    "download_event_ics",
    "download_events_ics",
]
