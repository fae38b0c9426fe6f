"""Calendar selection, date range handling and report assembly.

``WorkHoursCalculator`` holds the caller configuration (selected calendar,
date range, all-day flag), drives an ``EventSource`` and the aggregation
engine, and reports user-visible problems as status text instead of raising.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from workhours.aggregate import Summary, aggregate
from workhours.errors import WorkHoursError
from workhours.rules import DEFAULT_RULES, RuleTable, rule_table
from workhours.sources import CalendarInfo, EventSource
from workhours.util import format_duration, format_hours

logger = logging.getLogger(__name__)

STATUS_REQUESTING = "Requesting access…"
STATUS_GRANTED = "Access granted."
STATUS_NO_CALENDARS = "No calendars available."
STATUS_SELECT_CALENDAR = "Select a calendar."
STATUS_BAD_RANGE = "End date must be after start date."


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    @classmethod
    def current_year(cls, tz: str = "UTC", *, now: datetime | None = None) -> "DateRange":
        """Jan 1 00:00:00 through Dec 31 23:59:59 of the current year in ``tz``."""
        zone = ZoneInfo(tz)
        now = now.astimezone(zone) if now is not None else datetime.now(zone)
        start = datetime(now.year, 1, 1, tzinfo=zone)
        end = start + relativedelta(years=1) - timedelta(seconds=1)
        return cls(start=start, end=end)

    @property
    def is_valid(self) -> bool:
        return self.end > self.start

    @property
    def bounds(self) -> tuple[int, int]:
        """Range as integer Unix seconds."""
        return int(self.start.timestamp()), int(self.end.timestamp())


@dataclass(frozen=True)
class Report:
    summary: Summary
    status: str
    failed: bool = False

    @property
    def total_seconds(self) -> float:
        return self.summary.total_seconds

    @property
    def total_formatted(self) -> str:
        return format_duration(self.summary.total_seconds)


_EMPTY = Summary(groups=(), total_seconds=0.0)


class WorkHoursCalculator:
    """Compute per-title work hours for one calendar and date range.

    Attributes:
        source: Backend supplying calendars and events
        date_range: Range to report on (defaults to the current year)
        include_all_day: Whether all-day events count
        selected_calendar_id: Calendar to report on (first calendar if unset)
        status: Human-readable outcome of the last operation
    """

    def __init__(
        self,
        source: EventSource,
        *,
        date_range: DateRange | None = None,
        include_all_day: bool = False,
        selected_calendar_id: str | None = None,
        rules: RuleTable = DEFAULT_RULES,
    ) -> None:
        self.source: EventSource = source
        self.date_range: DateRange = date_range or DateRange.current_year()
        self.include_all_day: bool = include_all_day
        self.selected_calendar_id: str | None = selected_calendar_id
        self.rules: RuleTable = rule_table(rules)

        self.calendars: list[CalendarInfo] = []
        self.is_authorized: bool = False
        self.status: str = STATUS_REQUESTING
        self.summary: Summary = _EMPTY

    @property
    def total_seconds(self) -> float:
        return self.summary.total_seconds

    @property
    def total_formatted(self) -> str:
        return format_duration(self.summary.total_seconds)

    def bootstrap(self) -> bool:
        """Request access and load calendars. Returns True when authorized."""
        try:
            self.source.request_access()
        except Exception as e:
            logger.warning("Calendar access denied: %s", e)
            self.is_authorized = False
            self.status = f"Access denied: {e}"
            return False

        self.is_authorized = True
        self.status = STATUS_GRANTED
        try:
            self.load_calendars()
        except WorkHoursError as e:
            logger.warning("Failed to load calendars: %s", e)
            self.status = f"Failed to load calendars: {e}"
            return False
        except Exception as e:
            logger.exception("Unexpected error loading calendars")
            self.status = f"Failed to load calendars: {e}"
            return False
        return True

    def load_calendars(self) -> list[CalendarInfo]:
        self.calendars = self.source.calendars()
        if not self.calendars:
            self.status = STATUS_NO_CALENDARS
        elif self.selected_calendar_id is None:
            self.selected_calendar_id = self.calendars[0].id
        return self.calendars

    def _selected_calendar(self) -> CalendarInfo | None:
        if self.selected_calendar_id is None:
            return None
        for calendar in self.calendars:
            if calendar.id == self.selected_calendar_id:
                return calendar
        return None

    def _finish(self, summary: Summary, status: str, *, failed: bool = False) -> Report:
        self.summary = summary
        self.status = status
        return Report(summary=summary, status=status, failed=failed)

    def calculate(self) -> Report:
        """Fetch events for the selection and aggregate them per title."""
        calendar = self._selected_calendar()
        if calendar is None:
            return self._finish(_EMPTY, STATUS_SELECT_CALENDAR, failed=True)
        if not self.date_range.is_valid:
            return self._finish(_EMPTY, STATUS_BAD_RANGE, failed=True)

        start, end = self.date_range.bounds
        try:
            events = self.source.events(calendar.id, start, end)
        except WorkHoursError as e:
            logger.warning("Failed to load events for %s: %s", calendar.id, e)
            return self._finish(_EMPTY, f"Failed to load events: {e}", failed=True)
        except Exception as e:
            logger.exception("Unexpected error loading events for %s", calendar.id)
            return self._finish(_EMPTY, f"Failed to load events: {e}", failed=True)

        summary = aggregate(events, self.include_all_day, rules=self.rules)
        logger.info(
            "Calendar %s: %d event(s), %d unique title(s), %s",
            calendar.title,
            len(events),
            summary.unique_titles,
            format_duration(summary.total_seconds),
        )
        return self._finish(summary, self._status_for(summary))

    def _status_for(self, summary: Summary) -> str:
        parts = [f"Found {summary.unique_titles} unique title(s)."]
        for group in summary.groups:
            rule = self.rules.get(group.key)
            if rule is None:
                continue
            parts.append(
                f'For "{group.display_title}", deducted '
                f"{format_hours(rule.deduction)} from each instance with "
                f"duration ≥ {format_hours(rule.threshold)}."
            )
        return " ".join(parts)
