from dataclasses import dataclass
from datetime import datetime

from workhours.interval import Interval


def _timestamp(dt: datetime, edge: str) -> float:
    if dt.tzinfo is None:
        raise TypeError(
            f"Event {edge} must be a timezone-aware datetime.\n"
            f"Got naive datetime: {dt!r}\n"
            f"Hint: Add timezone info:\n"
            f"  from zoneinfo import ZoneInfo\n"
            f"  dt = datetime(..., tzinfo=ZoneInfo('Australia/Melbourne'))"
        )
    return dt.timestamp()


@dataclass(frozen=True, kw_only=True)
class Event:
    """A calendar event instance as supplied by an event source.

    Attributes:
        title: Raw event title (None when the source has no title)
        start: Start as Unix timestamp (seconds)
        end: End as Unix timestamp (seconds). Not guaranteed to be >= start;
            durations derived from it are clamped to zero.
        is_all_day: True for all-day events
        external_id: Identifier shared by the source across instances
            (e.g. an iCal UID)
        instance_id: Identifier of this particular instance
    """

    title: str | None = None
    start: float
    end: float
    is_all_day: bool = False
    external_id: str | None = None
    instance_id: str | None = None

    @classmethod
    def from_datetimes(
        cls,
        start: datetime,
        end: datetime,
        *,
        title: str | None = None,
        is_all_day: bool = False,
        external_id: str | None = None,
        instance_id: str | None = None,
    ) -> "Event":
        """Build an event from timezone-aware datetimes."""
        return cls(
            title=title,
            start=_timestamp(start, "start"),
            end=_timestamp(end, "end"),
            is_all_day=is_all_day,
            external_id=external_id,
            instance_id=instance_id,
        )

    def to_interval(self) -> Interval | None:
        """Return the covered interval, or None if the event has no duration."""
        if self.end <= self.start:
            return None
        return Interval(start=self.start, end=self.end)

    def __str__(self) -> str:
        """Human-friendly string showing event details and duration."""
        seconds = max(0.0, self.end - self.start)
        return f"Event('{self.title}', {self.start}→{self.end}, {seconds:g}s)"
