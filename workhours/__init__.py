from .aggregate import DeductionTrace, Summary, TitleGroup, aggregate
from .calculator import DateRange, Report, WorkHoursCalculator
from .errors import AccessDenied, CalendarNotFound, WorkHoursError
from .event import Event
from .filters import Filter
from .interval import Interval
from .metrics import (
    count_events,
    dedup_by_instance,
    duration,
    total_duration,
    union_duration,
)
from .normalize import UNTITLED, normalize_title
from .properties import Property, all_day, days, hours, minutes, one_of, seconds, title
from .rules import DEFAULT_RULES, DeductionRule, adjusted_duration, rule_table
from .sources import CalendarInfo, EventSource
from .sources.memory import MemorySource
from .util import format_duration

__all__ = [
    "Event",
    "Interval",
    "TitleGroup",
    "Summary",
    "DeductionTrace",
    "aggregate",
    "normalize_title",
    "UNTITLED",
    "duration",
    "total_duration",
    "count_events",
    "union_duration",
    "dedup_by_instance",
    "DeductionRule",
    "DEFAULT_RULES",
    "adjusted_duration",
    "rule_table",
    "Filter",
    "Property",
    "all_day",
    "title",
    "one_of",
    "days",
    "hours",
    "minutes",
    "seconds",
    "format_duration",
    "CalendarInfo",
    "EventSource",
    "MemorySource",
    "DateRange",
    "Report",
    "WorkHoursCalculator",
    "WorkHoursError",
    "AccessDenied",
    "CalendarNotFound",
]
