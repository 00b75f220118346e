import json
from pathlib import Path

import pytest

from icsexport.__main__ import EXIT_EMPTY, EXIT_ERROR, EXIT_OK, main


def row(event_id: str, title: str, start: str = "2025-07-04T14:00:00-05:00") -> dict:
    return {
        "id": event_id,
        "title": title,
        "start_date": start,
        "end_date": "2025-07-04T16:00:00-05:00",
        "is_all_day": False,
        "created_at": "2025-06-20T10:00:00Z",
        "updated_at": "2025-06-25T11:15:00Z",
    }


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ICS_EXPORT_LOCAL_TIMEZONE",
        "ICS_EXPORT_OUTPUT_DIR",
        "ICS_EXPORT_DEFAULT_FILENAME",
        "ICS_EXPORT_SKIP_INVALID",
    ):
        monkeypatch.delenv(name, raising=False)


def write_json(tmp_path: Path, data) -> str:
    path = tmp_path / "events.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_single_event_written_under_title_filename(tmp_path: Path) -> None:
    source = write_json(tmp_path, row("evt-1", "Drill Day"))
    out_dir = tmp_path / "out"

    assert main([source, "-o", str(out_dir), "--check"]) == EXIT_OK

    text = (out_dir / "Drill_Day.ics").read_bytes().decode("utf-8")
    assert "DTSTART:20250704T190000Z\r\n" in text
    assert text.endswith("END:VCALENDAR\r\n")


def test_multiple_events_use_base_name(tmp_path: Path) -> None:
    source = write_json(tmp_path, [row("a", "First"), row("b", "Second")])

    assert main([source, "-o", str(tmp_path), "--name", "station-12"]) == EXIT_OK

    text = (tmp_path / "station-12.ics").read_text(encoding="utf-8")
    assert text.count("BEGIN:VEVENT") == 2


def test_stdout_target(tmp_path: Path, capsysbinary: pytest.CaptureFixture) -> None:
    source = write_json(tmp_path, [row("a", "First")])

    assert main([source, "--stdout"]) == EXIT_OK

    out = capsysbinary.readouterr().out
    assert out.startswith(b"BEGIN:VCALENDAR\r\n")


def test_empty_input_exits_without_writing(tmp_path: Path) -> None:
    source = write_json(tmp_path, [])
    out_dir = tmp_path / "out"

    assert main([source, "-o", str(out_dir)]) == EXIT_EMPTY
    assert not out_dir.exists()


def test_invalid_event_aborts(tmp_path: Path) -> None:
    source = write_json(tmp_path, [row("a", "First"), row("b", "Broken", start="Invalid Date")])
    out_dir = tmp_path / "out"

    assert main([source, "-o", str(out_dir)]) == EXIT_ERROR
    assert not out_dir.exists()


def test_skip_invalid_exports_remaining(tmp_path: Path) -> None:
    source = write_json(tmp_path, [row("a", "First"), row("b", "Broken", start="Invalid Date")])

    assert main([source, "-o", str(tmp_path), "--skip-invalid"]) == EXIT_OK

    text = (tmp_path / "events.ics").read_text(encoding="utf-8")
    assert "UID:a@first-responder-connect" in text
    assert "b@first-responder-connect" not in text


def test_unreadable_input(tmp_path: Path) -> None:
    assert main([str(tmp_path / "missing.json")]) == EXIT_ERROR


def test_non_object_row_aborts(tmp_path: Path) -> None:
    source = write_json(tmp_path, [None, row("a", "First")])
    out_dir = tmp_path / "out"

    assert main([source, "-o", str(out_dir)]) == EXIT_ERROR
    assert not out_dir.exists()


def test_skip_invalid_drops_non_object_rows(tmp_path: Path) -> None:
    source = write_json(tmp_path, [None, "evt", row("a", "First")])

    assert main([source, "-o", str(tmp_path), "--skip-invalid"]) == EXIT_OK

    text = (tmp_path / "events.ics").read_text(encoding="utf-8")
    assert text.count("BEGIN:VEVENT") == 1
    assert "UID:a@first-responder-connect" in text
