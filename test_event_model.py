from datetime import date, datetime, timedelta

import pytest
from dateutil import tz as du_tz

from icsexport.core.event_model import Event
from icsexport.core.timezone_utils import parse_instant, resolve_timezone
from icsexport.exceptions.errors import EventValidationError


def make_row(**overrides) -> dict:
    row = {
        "id": "evt-1",
        "title": "Drill Day",
        "start_date": "2025-07-04T14:00:00-05:00",
        "end_date": "2025-07-04T16:00:00-05:00",
        "is_all_day": False,
        "location": "Station 12",
        "description": "Bring gear; rain, or shine.",
        "timezone": "America/Chicago",
        "created_at": "2025-06-20T10:00:00Z",
        "updated_at": "2025-06-25T11:15:00+00:00",
    }
    row.update(overrides)
    return row


def test_from_dict_parses_iso_timestamps() -> None:
    event = Event.from_dict(make_row())

    assert event.id == "evt-1"
    assert event.start_date == datetime(2025, 7, 4, 14, 0, tzinfo=du_tz.tzoffset(None, -5 * 3600))
    assert event.start_date.utcoffset() == timedelta(hours=-5)
    assert event.created_at == datetime(2025, 6, 20, 10, 0, tzinfo=du_tz.UTC)
    assert event.timezone == "America/Chicago"
    assert event.is_all_day is False


def test_from_dict_keeps_date_only_values_as_dates() -> None:
    event = Event.from_dict(make_row(start_date="2025-06-01", end_date="2025-06-03", is_all_day=True))

    assert event.start_date == date(2025, 6, 1)
    assert event.end_date == date(2025, 6, 3)
    assert not isinstance(event.start_date, datetime)


def test_from_dict_treats_blank_optionals_as_missing() -> None:
    event = Event.from_dict(make_row(end_date=None, description="", location=None, timezone=""))

    assert event.end_date is None
    assert event.description is None
    assert event.location is None
    assert event.timezone is None


@pytest.mark.parametrize("field_name", ["id", "title", "start_date", "created_at", "updated_at"])
def test_from_dict_requires_fields(field_name: str) -> None:
    row = make_row()
    del row[field_name]

    with pytest.raises(EventValidationError) as excinfo:
        Event.from_dict(row)

    assert excinfo.value.field_name == field_name
    assert excinfo.value.reason == "missing"


def test_from_dict_rejects_unparseable_start() -> None:
    with pytest.raises(EventValidationError) as excinfo:
        Event.from_dict(make_row(start_date="Invalid Date"))

    assert excinfo.value.field_name == "start_date"
    assert excinfo.value.event_title == "Drill Day"
    assert "unparseable" in str(excinfo.value)


def test_to_dict_round_trips() -> None:
    event = Event.from_dict(make_row())

    assert Event.from_dict(event.to_dict()) == event


def test_event_is_immutable() -> None:
    event = Event.from_dict(make_row())

    with pytest.raises(AttributeError):
        event.title = "Changed"  # type: ignore[misc]


def test_parse_instant_passes_through_temporal_objects() -> None:
    moment = datetime(2025, 1, 1, 12, 0)
    assert parse_instant(moment, "start_date") is moment
    assert parse_instant(date(2025, 1, 1), "start_date") == date(2025, 1, 1)


def test_parse_instant_rejects_other_types() -> None:
    with pytest.raises(EventValidationError) as excinfo:
        parse_instant(1720101600, "start_date", "Drill Day")

    assert "unsupported type int" in str(excinfo.value)


def test_resolve_timezone_handles_abbreviations_and_unknowns() -> None:
    assert str(resolve_timezone("CDT")) == "America/Chicago"
    assert str(resolve_timezone("Europe/Berlin")) == "Europe/Berlin"
    assert str(resolve_timezone("Mars/Olympus_Mons")) == "UTC"
    assert resolve_timezone("local") is not None


@pytest.mark.parametrize("field_name, value", [("location", 12), ("description", ["a"]), ("title", 7)])
def test_from_dict_rejects_non_text_fields(field_name: str, value) -> None:
    with pytest.raises(EventValidationError) as excinfo:
        Event.from_dict(make_row(**{field_name: value}))

    assert excinfo.value.field_name == field_name
    assert excinfo.value.reason == "not text"


@pytest.mark.parametrize("data", [None, "evt-1", 42, ["evt-1"]])
def test_from_dict_rejects_non_mapping_rows(data) -> None:
    with pytest.raises(EventValidationError) as excinfo:
        Event.from_dict(data)

    assert excinfo.value.field_name == "event"
    assert excinfo.value.reason == "not an object"
