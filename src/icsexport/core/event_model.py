"""Event data model for calendar export."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from icsexport.core.timezone_utils import Instant, parse_instant
from icsexport.exceptions.errors import EventValidationError


def _isoformat(value: Optional[Instant]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Event:
    """An event row handed over by the application layer.

    ``timezone`` is display metadata only; serialization always works from
    the absolute instants.
    """

    id: str
    title: str
    start_date: Instant
    created_at: datetime
    updated_at: datetime
    end_date: Optional[Instant] = None
    description: Optional[str] = None
    location: Optional[str] = None
    is_all_day: bool = False
    timezone: Optional[str] = None

    # Required keys for from_dict()
    REQUIRED_FIELDS = frozenset({"id", "title", "start_date", "created_at", "updated_at"})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        """Create an Event from an application row, parsing temporal fields.

        Args:
            data: Dictionary containing event data. Timestamps may be
                datetimes or ISO-8601 strings.

        Returns:
            A validated Event instance.

        Raises:
            EventValidationError: If the row is not a mapping, a required
                field is missing, a timestamp cannot be parsed or a text
                field holds a non-string value.
        """
        if not isinstance(data, Mapping):
            raise EventValidationError("event", None, "not an object")

        title = data.get("title")
        for field_name in sorted(cls.REQUIRED_FIELDS):
            if data.get(field_name) in (None, ""):
                raise EventValidationError(field_name, title, "missing")
        title = _text(title, "title", None)

        created_at = parse_instant(data["created_at"], "created_at", title)
        updated_at = parse_instant(data["updated_at"], "updated_at", title)
        end_raw = data.get("end_date")

        return cls(
            id=str(data["id"]),
            title=title,
            start_date=parse_instant(data["start_date"], "start_date", title),
            created_at=_as_datetime(created_at),
            updated_at=_as_datetime(updated_at),
            end_date=parse_instant(end_raw, "end_date", title) if end_raw else None,
            description=_text(data.get("description"), "description", title) or None,
            location=_text(data.get("location"), "location", title) or None,
            is_all_day=bool(data.get("is_all_day", False)),
            timezone=_text(data.get("timezone"), "timezone", title) or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to a row dictionary with ISO-8601 timestamps.

        Returns:
            Dictionary representation of the event.
        """
        result = {
            "id": self.id,
            "title": self.title,
            "start_date": _isoformat(self.start_date),
            "end_date": _isoformat(self.end_date),
            "is_all_day": self.is_all_day,
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
        }
        if self.description:
            result["description"] = self.description
        if self.location:
            result["location"] = self.location
        if self.timezone:
            result["timezone"] = self.timezone
        return result


def _text(value: Any, field_name: str, event_title: Optional[str]) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise EventValidationError(field_name, event_title, "not text")


def _as_datetime(value: Instant) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)

