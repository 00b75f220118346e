"""Read generated ICS documents back for verification."""

import logging
from typing import Dict, List, Optional

from icalendar import Calendar

from icsexport.exceptions.errors import ICSExportError

logger = logging.getLogger(__name__)


def _text(component, name: str) -> Optional[str]:
    value = component.get(name)
    return str(value) if value is not None else None


def _temporal(component, name: str):
    value = component.get(name)
    return value.dt if value is not None else None


def read_events(document: str) -> List[Dict]:
    """Parse an ICS document into one dictionary per VEVENT.

    Args:
        document: ICS text.

    Returns:
        List of dicts with uid, summary, description, location, dtstart
        and dtend; text values are unescaped, dates are date/datetime objects.

    Raises:
        ICSExportError: If the document cannot be parsed.
    """
    try:
        calendar = Calendar.from_ical(document.encode("utf-8"))
    except ValueError as exc:
        raise ICSExportError(f"Failed to parse ICS document: {exc}") from exc

    events = []
    for component in calendar.walk("VEVENT"):
        events.append({
            "uid": _text(component, "UID"),
            "summary": _text(component, "SUMMARY"),
            "description": _text(component, "DESCRIPTION"),
            "location": _text(component, "LOCATION"),
            "dtstart": _temporal(component, "DTSTART"),
            "dtend": _temporal(component, "DTEND"),
        })

    logger.debug("Read %d events from document", len(events))
    return events
