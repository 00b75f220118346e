"""Core serialization logic for icsexport."""

from icsexport.core.event_model import Event
from icsexport.core.ics_builder import (
    build_single_event_document,
    build_multi_event_document,
    collect_event_blocks,
    generate_uid,
)
from icsexport.core.delivery import (
    CalendarFile,
    DirectorySink,
    StreamSink,
    deliver_as_file,
    download_event_ics,
    download_events_ics,
    filename_for_event,
)
from icsexport.core.ics_reader import read_events

__all__ = [
    "Event",
    "build_single_event_document",
    "build_multi_event_document",
    "collect_event_blocks",
    "generate_uid",
    "CalendarFile",
    "DirectorySink",
    "StreamSink",
    "deliver_as_file",
    "download_event_ics",
    "download_events_ics",
    "filename_for_event",
    "read_events",
]
