"""Event sources supplying calendars and their events.

This module provides the abstract base class for calendar backends, along
with implementations for different backends.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from workhours.event import Event


@dataclass(frozen=True)
class CalendarInfo:
    """A calendar offered by a source.

    Attributes:
        id: Backend calendar identifier
        title: Human-readable calendar name
        color: Calendar color as a hex string, if the backend has one
    """

    id: str
    title: str
    color: str | None = None


class EventSource(ABC):
    """Abstract base class for calendar backends.

    Sources are synchronous: every call returns fully materialized data or
    raises before the aggregation engine sees anything.
    """

    def request_access(self) -> None:
        """Ask the backend for read access to the user's calendars.

        Raises:
            AccessDenied: If access is refused
        """
        return None

    @abstractmethod
    def calendars(self) -> list[CalendarInfo]:
        """Return the available calendars, sorted case-insensitively by title."""
        pass

    @abstractmethod
    def events(self, calendar_id: str, start: int, end: int) -> list[Event]:
        """Return the events of one calendar overlapping ``[start, end]``.

        An event ending exactly at ``start`` is not part of the range.

        Args:
            calendar_id: Identifier of a calendar returned by ``calendars()``
            start: Range start (Unix seconds)
            end: Range end (Unix seconds)

        Raises:
            CalendarNotFound: If the calendar id is unknown
        """
        pass

    def find_calendar(self, calendar_id: str) -> CalendarInfo | None:
        for calendar in self.calendars():
            if calendar.id == calendar_id:
                return calendar
        return None


def sort_calendars(calendars: list[CalendarInfo]) -> list[CalendarInfo]:
    return sorted(calendars, key=lambda c: c.title.lower())


__all__ = ["CalendarInfo", "EventSource", "sort_calendars"]
