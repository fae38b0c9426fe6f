"""Tests for the workhours command line."""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from workhours import CalendarInfo, Event, EventSource, MemorySource
from workhours.cli import STATUS_NOT_CONFIGURED, build_parser, main
from workhours.config import get_settings

MELBOURNE = ZoneInfo("Australia/Melbourne")


@pytest.fixture(autouse=True)
def _melbourne_settings(monkeypatch):
    monkeypatch.setenv("WORKHOURS_TIMEZONE", "Australia/Melbourne")
    monkeypatch.delenv("WORKHOURS_CALENDAR_ID", raising=False)
    monkeypatch.delenv("WORKHOURS_INCLUDE_ALL_DAY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _shift(title: str, day: int, hours: float, *, all_day: bool = False) -> Event:
    start = datetime(2025, 7, day, 9, tzinfo=MELBOURNE)
    return Event.from_datetimes(
        start, start + timedelta(hours=hours), title=title, is_all_day=all_day
    )


def _source(**kwargs) -> MemorySource:
    return MemorySource(
        {
            CalendarInfo(id="work", title="Work"): [
                _shift("MarryBrown Dandenong (PC)", 1, 6),
                _shift("marrybrown dandenong (pc)", 2, 4),
                _shift("Training", 3, 2),
                _shift("Annual Leave", 4, 24, all_day=True),
            ],
            CalendarInfo(id="home", title="Home"): [],
        },
        **kwargs,
    )


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_calendars_command_lists_calendars(capsys):
    assert main(["calendars"], source=_source()) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["home\tHome", "work\tWork"]


def test_report_prints_groups_total_and_status(capsys):
    code = main(
        ["report", "--calendar", "work", "--start", "2025-07-01", "--end", "2025-07-31"],
        source=_source(),
    )

    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("MarryBrown Dandenong (PC)")
    assert "x2" in lines[0] and lines[0].endswith("9h 30m")
    assert lines[1].startswith("Training") and lines[1].endswith("2h 0m")
    assert lines[2] == "Total: 11h 30m"
    assert lines[3].startswith("Found 2 unique title(s).")


def test_report_can_include_all_day_events(capsys):
    code = main(
        [
            "report",
            "--calendar",
            "work",
            "--start",
            "2025-07-01",
            "--end",
            "2025-07-31",
            "--include-all-day",
        ],
        source=_source(),
    )

    assert code == 0
    assert "Total: 35h 30m" in capsys.readouterr().out


def test_include_all_day_default_comes_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("WORKHOURS_INCLUDE_ALL_DAY", "yes")
    get_settings.cache_clear()

    main(
        ["report", "--calendar", "work", "--start", "2025-07-01", "--end", "2025-07-31"],
        source=_source(),
    )

    assert "Total: 35h 30m" in capsys.readouterr().out


def test_end_date_is_inclusive_of_the_whole_day(capsys):
    main(
        ["report", "--calendar", "work", "--start", "2025-07-01", "--end", "2025-07-03"],
        source=_source(),
    )
    assert "Training" in capsys.readouterr().out


def test_report_fails_on_inverted_range(capsys):
    code = main(
        ["report", "--calendar", "work", "--start", "2025-07-31", "--end", "2025-07-01"],
        source=_source(),
    )
    assert code == 1
    assert capsys.readouterr().out.strip() == "End date must be after start date."


def test_report_fails_when_access_denied(capsys):
    code = main(["report"], source=_source(grant_access=False))
    assert code == 1
    assert capsys.readouterr().out.startswith("Access denied:")


def test_unknown_calendar_asks_for_selection(capsys):
    code = main(["report", "--calendar", "nope"], source=_source())
    assert code == 1
    assert capsys.readouterr().out.strip() == "Select a calendar."


def test_invalid_date_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["report", "--start", "not-a-date"], source=_source())
    assert excinfo.value.code == 2


class _UnreachableCalendars(EventSource):
    def calendars(self) -> list[CalendarInfo]:
        raise ConnectionError("calendar list unavailable")

    def events(self, calendar_id: str, start: int, end: int) -> list[Event]:
        return []


def test_report_fails_when_calendar_list_is_unavailable(capsys):
    code = main(["report"], source=_UnreachableCalendars())
    assert code == 1
    assert capsys.readouterr().out.strip() == (
        "Failed to load calendars: calendar list unavailable"
    )


def test_calendars_command_fails_without_credentials(monkeypatch, capsys):
    monkeypatch.delenv("GOOGLE_CREDENTIALS_PATH", raising=False)
    get_settings.cache_clear()

    assert main(["calendars"]) == 1
    assert capsys.readouterr().out.strip() == STATUS_NOT_CONFIGURED
