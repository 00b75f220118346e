"""ICS document building for one or many events."""

import logging
import warnings
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import List, Optional, Sequence, Tuple

import pytz

from icsexport.config.constants import (
    CRLF,
    ICS_CALSCALE,
    ICS_METHOD,
    ICS_PRODID,
    ICS_VERSION,
    UID_DOMAIN,
)
from icsexport.config.settings import EXPORT_CONFIG
from icsexport.core.event_model import Event
from icsexport.core.ics_format import (
    content_line,
    escape_text,
    format_ics_date,
    format_ics_datetime,
)
from icsexport.core.timezone_utils import next_day, parse_instant, resolve_timezone, to_local_date
from icsexport.exceptions.errors import EmptyInputWarning, EventValidationError

logger = logging.getLogger(__name__)


@dataclass
class EventBlock:
    """Serialized VEVENT lines for one event."""
    uid: str
    lines: List[str]


def generate_uid(event_id: str) -> str:
    """Return the stable UID for an event id."""
    return f"{event_id}@{UID_DOMAIN}"


def build_single_event_document(
    event: Event,
    now: Optional[datetime] = None,
    local_tz: Optional[tzinfo] = None,
) -> str:
    """Build a complete calendar document holding one event.

    Args:
        event: The event to export.
        now: Generation time for DTSTAMP (default: current UTC time).
        local_tz: Zone used for naive datetimes and all-day dates
            (default: ExportConfig.local_timezone).

    Returns:
        The CRLF-terminated ICS document.

    Raises:
        EventValidationError: If the event's start date is missing or
            unparseable.
    """
    tz = local_tz or resolve_timezone(EXPORT_CONFIG.local_timezone)
    block = _build_event_block(event, _stamp(now, tz), tz)
    return _render_document([block])


def build_multi_event_document(
    events: Sequence[Event],
    now: Optional[datetime] = None,
    local_tz: Optional[tzinfo] = None,
    skip_invalid: Optional[bool] = None,
) -> str:
    """Build one calendar document wrapping every event, in list order.

    An empty ``events`` returns an empty string, which is not a valid
    calendar file and must not be delivered.

    By default one invalid event aborts the whole batch. With
    ``skip_invalid`` the invalid events are logged and left out; if none
    remain the result is an empty string.

    Args:
        events: Events to export.
        now: Generation time for DTSTAMP (default: current UTC time).
        local_tz: Zone used for naive datetimes and all-day dates.
        skip_invalid: Skip-and-continue instead of abort (default:
            ExportConfig.skip_invalid).

    Returns:
        The CRLF-terminated ICS document, or "" when there is nothing to export.

    Raises:
        EventValidationError: If an event is invalid and skipping is off.
    """
    if not events:
        warnings.warn(
            "No events supplied; returning an empty document",
            EmptyInputWarning,
            stacklevel=2,
        )
        return ""

    if skip_invalid is None:
        skip_invalid = EXPORT_CONFIG.skip_invalid

    tz = local_tz or resolve_timezone(EXPORT_CONFIG.local_timezone)
    stamp = _stamp(now, tz)

    if skip_invalid:
        blocks, skipped = _collect_blocks(events, stamp, tz)
        if skipped:
            logger.warning("Skipped %d of %d events during export", len(skipped), len(events))
        if not blocks:
            return ""
    else:
        blocks = [_build_event_block(event, stamp, tz) for event in events]

    return _render_document(blocks)


def collect_event_blocks(
    events: Sequence[Event],
    now: Optional[datetime] = None,
    local_tz: Optional[tzinfo] = None,
) -> Tuple[List[EventBlock], List[str]]:
    """Serialize each event, collecting failures instead of raising.

    Args:
        events: Events to serialize.
        now: Generation time for DTSTAMP.
        local_tz: Zone used for naive datetimes and all-day dates.

    Returns:
        Tuple of (event_blocks, warnings).
    """
    tz = local_tz or resolve_timezone(EXPORT_CONFIG.local_timezone)
    return _collect_blocks(events, _stamp(now, tz), tz)


def _collect_blocks(
    events: Sequence[Event], stamp: str, tz: tzinfo
) -> Tuple[List[EventBlock], List[str]]:
    blocks = []
    skipped = []
    for index, event in enumerate(events):
        try:
            blocks.append(_build_event_block(event, stamp, tz))
        except EventValidationError as exc:
            warning_msg = f"Skipping event {index + 1}: {exc}"
            logger.warning(warning_msg)
            skipped.append(warning_msg)

    return blocks, skipped


def _stamp(now: Optional[datetime], tz: tzinfo) -> str:
    return format_ics_datetime(now or datetime.now(pytz.utc), tz)


def _calendar_header() -> List[str]:
    return [
        "BEGIN:VCALENDAR",
        f"VERSION:{ICS_VERSION}",
        f"PRODID:{ICS_PRODID}",
        f"CALSCALE:{ICS_CALSCALE}",
        f"METHOD:{ICS_METHOD}",
    ]


def _render_document(blocks: List[EventBlock]) -> str:
    lines = _calendar_header()
    for block in blocks:
        lines.extend(block.lines)
    lines.append("END:VCALENDAR")
    return CRLF.join(lines) + CRLF


def _require_text(value, field_name: str, event_title: Optional[str]) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise EventValidationError(field_name, event_title, "not text")


def _build_event_block(event: Event, stamp: str, tz: tzinfo) -> EventBlock:
    """Serialize one event into VEVENT lines.

    All fields are formatted before any line is assembled so a bad
    timestamp never yields a partial block.
    """
    title = _require_text(event.title, "title", None) or ""
    description = _require_text(event.description, "description", title)
    location = _require_text(event.location, "location", title)
    start = parse_instant(event.start_date, "start_date", title)
    end = parse_instant(event.end_date, "end_date", title) if event.end_date else None
    created = format_ics_datetime(parse_instant(event.created_at, "created_at", title), tz)
    modified = format_ics_datetime(parse_instant(event.updated_at, "updated_at", title), tz)

    uid = generate_uid(event.id)
    lines = [
        "BEGIN:VEVENT",
        content_line("UID", uid),
        content_line("DTSTAMP", stamp),
    ]

    if event.is_all_day:
        lines.append(content_line("DTSTART;VALUE=DATE", format_ics_date(start, tz)))
        if end is not None:
            # All-day end is inclusive in the app, exclusive in RFC 5545
            exclusive_end = next_day(to_local_date(end, tz))
            lines.append(content_line("DTEND;VALUE=DATE", format_ics_date(exclusive_end, tz)))
    else:
        lines.append(content_line("DTSTART", format_ics_datetime(start, tz)))
        if end is not None:
            lines.append(content_line("DTEND", format_ics_datetime(end, tz)))

    lines.append(content_line("SUMMARY", escape_text(title)))
    if description:
        lines.append(content_line("DESCRIPTION", escape_text(description)))
    if location:
        lines.append(content_line("LOCATION", escape_text(location)))

    lines.append(content_line("CREATED", created))
    lines.append(content_line("LAST-MODIFIED", modified))
    lines.append("END:VEVENT")

    return EventBlock(uid=uid, lines=lines)
