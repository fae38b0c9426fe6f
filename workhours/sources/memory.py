"""In-memory event source.

This module provides MemorySource, an event source backed by in-memory
storage. It's useful for testing, prototyping, and offline reports.
"""

import bisect
from collections.abc import Iterable, Mapping, Sequence
from typing_extensions import override

from workhours.errors import AccessDenied, CalendarNotFound
from workhours.event import Event
from workhours.sources import CalendarInfo, EventSource, sort_calendars


class _StaticEvents:
    """Events of one calendar, indexed for range queries."""

    def __init__(self, events: Sequence[Event]):
        self._events: tuple[Event, ...] = tuple(
            sorted(events, key=lambda e: (e.start, e.end))
        )

        # Build max-end prefix array for efficient query pruning
        # max_end_prefix[i] = max(event.end for event in events[:i+1])
        self._max_end_prefix: list[float] = []
        max_so_far = float("-inf")
        for event in self._events:
            max_so_far = max(max_so_far, event.end)
            self._max_end_prefix.append(max_so_far)

    def fetch(self, start: int, end: int) -> list[Event]:
        # Find first position where max_end >= start (all before can be skipped)
        start_idx = bisect.bisect_left(self._max_end_prefix, start)
        # Find first event with start > end
        end_idx = bisect.bisect_right(self._events, end, key=lambda e: e.start)

        # Events ending exactly at start belong to the previous window
        return [
            e
            for e in self._events[start_idx:end_idx]
            if e.end > start or e.start >= start
        ]


class MemorySource(EventSource):
    """Event source holding calendars and events in memory.

    Example:
        >>> work = CalendarInfo(id="work", title="Work")
        >>> source = MemorySource({work: [Event(title="Shift", start=0, end=3600)]})
        >>> [e.title for e in source.events("work", 0, 7200)]
        ['Shift']
    """

    def __init__(
        self,
        calendars: Mapping[CalendarInfo, Iterable[Event]] | None = None,
        *,
        grant_access: bool = True,
    ) -> None:
        """Initialize an empty or pre-populated memory source.

        Args:
            calendars: Optional mapping of calendars to their events
            grant_access: When False, ``request_access`` raises AccessDenied
        """
        self._calendars: dict[str, CalendarInfo] = {}
        self._events: dict[str, list[Event]] = {}
        self.grant_access: bool = grant_access

        for calendar, events in (calendars or {}).items():
            self.add_calendar(calendar, events)

    def add_calendar(self, calendar: CalendarInfo, events: Iterable[Event] = ()) -> None:
        self._calendars[calendar.id] = calendar
        self._events.setdefault(calendar.id, []).extend(events)

    def add(self, calendar_id: str, *events: Event) -> None:
        if calendar_id not in self._calendars:
            raise CalendarNotFound(calendar_id)
        self._events[calendar_id].extend(events)

    @override
    def request_access(self) -> None:
        if not self.grant_access:
            raise AccessDenied("Calendar access denied.")

    @override
    def calendars(self) -> list[CalendarInfo]:
        return sort_calendars(list(self._calendars.values()))

    @override
    def events(self, calendar_id: str, start: int, end: int) -> list[Event]:
        if calendar_id not in self._calendars:
            raise CalendarNotFound(calendar_id)
        return _StaticEvents(self._events[calendar_id]).fetch(start, end)
