"""Instant parsing and timezone conversion utilities."""

import logging
import re
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Union

import pytz
import tzlocal
from dateutil import parser as dateutil_parser
from dateutil import tz as du_tz

from icsexport.config.constants import ABBR_TO_TZ
from icsexport.exceptions.errors import EventValidationError

logger = logging.getLogger(__name__)

Instant = Union[datetime, date]

DATE_ONLY_PATTERN = re.compile(r"^\d{4}-?\d{2}-?\d{2}$")


def parse_instant(
    value,
    field_name: str,
    event_title: Optional[str] = None,
) -> Instant:
    """Coerce a temporal field to a datetime (or a date for date-only values).

    Args:
        value: A datetime, date or ISO-8601 string.
        field_name: Name of the field, for error messages.
        event_title: Optional event title, for error messages.

    Returns:
        A datetime, or a date when the input carries no time component.

    Raises:
        EventValidationError: If the value is missing or cannot be parsed.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise EventValidationError(field_name, event_title, "missing")

    if isinstance(value, (datetime, date)):
        return value

    if not isinstance(value, str):
        raise EventValidationError(
            field_name, event_title, f"unsupported type {type(value).__name__}"
        )

    text = value.strip()
    try:
        parsed = dateutil_parser.isoparse(text)
    except (ValueError, OverflowError) as exc:
        raise EventValidationError(
            field_name, event_title, f"unparseable value {value!r}"
        ) from exc

    # "2025-06-01" names a calendar day, not midnight of some zone
    if DATE_ONLY_PATTERN.match(text):
        return parsed.date()
    return parsed


def resolve_timezone(tz_str: Optional[str]) -> tzinfo:
    """Resolve a timezone string to a timezone object.

    Args:
        tz_str: The timezone string (e.g., "EST", "America/New_York", "local").

    Returns:
        A timezone object. Unknown names fall back to UTC.
    """
    tz_str_raw = tz_str or "local"
    tz_upper = tz_str_raw.upper()

    if tz_upper == "LOCAL":
        local_tz_obj = tzlocal.get_localzone()
        tz_name = getattr(local_tz_obj, "zone", None) or getattr(local_tz_obj, "key", None)
        if not tz_name:
            return local_tz_obj
    else:
        tz_name = ABBR_TO_TZ.get(tz_upper, tz_str_raw)

    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        # Last-ditch attempt with dateutil (may return fixed offset)
        fallback = du_tz.gettz(tz_name)
        if fallback is None:
            logger.warning("Couldn't resolve timezone '%s' - using UTC", tz_str_raw)
            return pytz.utc
        return fallback


def attach_timezone(tzobj: tzinfo, naive_dt: datetime) -> datetime:
    """Return timezone-aware datetime, using proper DST rules where possible.

    Args:
        tzobj: The timezone object (pytz or dateutil).
        naive_dt: A naive datetime to attach the timezone to.

    Returns:
        A timezone-aware datetime.
    """
    if hasattr(tzobj, "localize"):
        try:
            return tzobj.localize(naive_dt, is_dst=None)
        except (pytz.AmbiguousTimeError, pytz.NonExistentTimeError):
            return tzobj.localize(naive_dt, is_dst=True)
    return naive_dt.replace(tzinfo=tzobj)


def to_utc(value: Instant, local_tz: tzinfo) -> datetime:
    """Convert an instant to an aware UTC datetime.

    Naive datetimes are read as wall time in ``local_tz``; bare dates are
    taken as local midnight.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        value = attach_timezone(local_tz, value)
    return value.astimezone(pytz.utc)


def to_local_date(value: Instant, local_tz: tzinfo) -> date:
    """Return the calendar date of an instant as seen in ``local_tz``."""
    if not isinstance(value, datetime):
        return value
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.date()
    return value.astimezone(local_tz).date()


def next_day(day: date) -> date:
    """Return the following calendar day."""
    return day + timedelta(days=1)
