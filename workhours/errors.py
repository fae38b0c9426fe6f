"""Exceptions raised by workhours event sources."""


class WorkHoursError(Exception):
    """Base class for workhours errors."""


class AccessDenied(WorkHoursError):
    """The event source refused access to the user's calendars."""


class CalendarNotFound(WorkHoursError):
    """The requested calendar id is not known to the event source."""

    def __init__(self, calendar_id: str):
        super().__init__(f"Unknown calendar id: {calendar_id!r}")
        self.calendar_id: str = calendar_id
