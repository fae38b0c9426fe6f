from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from datetime import datetime, time
from zoneinfo import ZoneInfo

from dateutil import parser as dateparser

from .calculator import DateRange, WorkHoursCalculator
from .config import get_settings
from .log import configure_logging
from .sources import EventSource
from .util import format_duration

logger = logging.getLogger(__name__)

STATUS_NOT_CONFIGURED = "Google credentials not configured. Set GOOGLE_CREDENTIALS_PATH."


def _parse_date(raw: str, *, tz: str, end_of_day: bool) -> datetime:
    try:
        value = dateparser.isoparse(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {raw!r}: {e}") from e
    # Bare dates cover the whole day
    if end_of_day and len(raw.strip()) == 10:
        value = datetime.combine(value.date(), time(23, 59, 59))
    if value.tzinfo is None:
        value = value.replace(tzinfo=ZoneInfo(tz))
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Total calendar hours per distinct event title."
    )
    parser.add_argument("--log-level", default=None, help="Override WORKHOURS_LOG_LEVEL.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("calendars", help="List the calendars you can report on.")

    report_parser = subparsers.add_parser("report", help="Print hours per event title.")
    report_parser.add_argument("--calendar", default=None, help="Calendar id (default: first).")
    report_parser.add_argument("--start", default=None, help="Range start, ISO date or datetime.")
    report_parser.add_argument("--end", default=None, help="Range end, ISO date or datetime.")
    report_parser.add_argument(
        "--include-all-day",
        action="store_true",
        default=None,
        help="Count all-day events too.",
    )

    return parser


def _default_source() -> EventSource | None:
    from .sources.gcsa import GoogleCalendarSource

    google = get_settings().google
    if not google.is_configured:
        return None
    return GoogleCalendarSource(
        credentials_path=google.credentials_path,
        token_path=google.token_path,
    )


def _date_range(args: argparse.Namespace, tz: str) -> DateRange:
    default = DateRange.current_year(tz)
    start = _parse_date(args.start, tz=tz, end_of_day=False) if args.start else default.start
    end = _parse_date(args.end, tz=tz, end_of_day=True) if args.end else default.end
    return DateRange(start=start, end=end)


def run_calendars(calculator: WorkHoursCalculator) -> int:
    if not calculator.bootstrap():
        print(calculator.status)
        return 1
    for calendar in calculator.calendars:
        print(f"{calendar.id}\t{calendar.title}")
    if not calculator.calendars:
        print(calculator.status)
    return 0


def run_report(calculator: WorkHoursCalculator) -> int:
    if not calculator.bootstrap():
        print(calculator.status)
        return 1

    report = calculator.calculate()
    if report.failed:
        print(report.status)
        return 1

    width = max((len(g.display_title) for g in report.summary.groups), default=0)
    for group in report.summary.groups:
        print(
            f"{group.display_title:<{width}}  x{group.count:<4} "
            f"{format_duration(group.total_seconds)}"
        )
    print(f"Total: {report.total_formatted}")
    print(report.status)
    return 0


def main(argv: Sequence[str] | None = None, *, source: EventSource | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    settings = get_settings().report
    tz = settings.timezone

    if source is None:
        source = _default_source()
    if source is None:
        print(STATUS_NOT_CONFIGURED)
        return 1

    if args.command == "calendars":
        calculator = WorkHoursCalculator(source)
        return run_calendars(calculator)

    if args.command == "report":
        try:
            date_range = _date_range(args, tz)
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))
        include_all_day = (
            settings.include_all_day if args.include_all_day is None else args.include_all_day
        )
        calculator = WorkHoursCalculator(
            source,
            date_range=date_range,
            include_all_day=include_all_day,
            selected_calendar_id=args.calendar or settings.calendar_id,
        )
        logger.debug("Reporting %s to %s", date_range.start, date_range.end)
        return run_report(calculator)

    parser.print_help()  # pragma: no cover - argparse enforces choices
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
