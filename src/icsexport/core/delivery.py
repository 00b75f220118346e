"""Packaging ICS documents as downloadable .ics files.

Delivery is decoupled from the platform through a *sink*: any callable
accepting ``(data: bytes, filename: str)``. ``DirectorySink`` writes into a
folder, ``StreamSink`` writes to an open binary stream such as stdout or an
HTTP response body.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Sequence, Union

from icsexport.config.constants import ICS_ENCODING, ICS_EXTENSION, ICS_MIME_TYPE
from icsexport.config.settings import EXPORT_CONFIG
from icsexport.core.event_model import Event
from icsexport.core.ics_builder import build_multi_event_document, build_single_event_document
from icsexport.exceptions.errors import DeliveryError, EmptyDocumentError

logger = logging.getLogger(__name__)

Sink = Callable[[bytes, str], None]

NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class CalendarFile:
    """A delivered calendar file."""
    filename: str
    data: bytes
    mime_type: str = ICS_MIME_TYPE


def ensure_ics_extension(filename: str) -> str:
    """Append ``.ics`` unless the name already ends with it."""
    if filename.lower().endswith(ICS_EXTENSION):
        return filename
    return filename + ICS_EXTENSION


def filename_for_event(event: Event) -> str:
    """Derive a download filename from an event title.

    Every non-alphanumeric character is replaced with an underscore.
    """
    return NON_ALPHANUMERIC.sub("_", event.title) + ICS_EXTENSION


def deliver_as_file(document: str, filename: str, sink: Sink) -> CalendarFile:
    """Encode a document as UTF-8 and hand it to a sink once.

    Args:
        document: ICS text produced by the builder.
        filename: Target filename; ``.ics`` is enforced.
        sink: Callable receiving ``(data, filename)``.

    Returns:
        The CalendarFile that was delivered.

    Raises:
        EmptyDocumentError: If the document is empty.
        DeliveryError: If the sink fails.
    """
    filename = ensure_ics_extension(filename)
    if not document:
        raise EmptyDocumentError(filename)

    calendar_file = CalendarFile(filename=filename, data=document.encode(ICS_ENCODING))
    try:
        sink(calendar_file.data, calendar_file.filename)
    except OSError as exc:
        logger.error("Sink failed for %s: %s", filename, exc)
        raise DeliveryError(filename, str(exc)) from exc

    logger.info("Delivered %s (%d bytes)", filename, len(calendar_file.data))
    return calendar_file


def download_event_ics(event: Event, sink: Sink) -> CalendarFile:
    """Export a single event under a title-derived filename."""
    document = build_single_event_document(event)
    return deliver_as_file(document, filename_for_event(event), sink)


def download_events_ics(
    events: Sequence[Event],
    sink: Sink,
    filename: Optional[str] = None,
) -> CalendarFile:
    """Export several events as one document named ``<filename>.ics``.

    Raises:
        EmptyDocumentError: If there is nothing to export.
    """
    document = build_multi_event_document(events)
    return deliver_as_file(document, filename or EXPORT_CONFIG.default_filename, sink)


class DirectorySink:
    """Write calendar files into a directory."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def __call__(self, data: bytes, filename: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Never allow the filename to escape the target directory
        path = self.directory / os.path.basename(filename)
        try:
            with open(path, "wb") as fh:
                fh.write(data)
        except OSError:
            if path.exists():
                path.unlink()
            raise
        logger.debug("Wrote %s", path)


class StreamSink:
    """Write calendar bytes to an already-open binary stream."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def __call__(self, data: bytes, filename: str) -> None:
        self.stream.write(data)
        self.stream.flush()
