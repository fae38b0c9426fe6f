"""Google Calendar event source.

This module provides GoogleCalendarSource, an EventSource implementation
that reads calendars and events from Google Calendar via the gcsa library.
"""

import logging
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from gcsa.google_calendar import GoogleCalendar
from typing_extensions import override

from workhours.errors import AccessDenied, CalendarNotFound
from workhours.event import Event
from workhours.sources import CalendarInfo, EventSource, sort_calendars

logger = logging.getLogger(__name__)

_UTC_TIMEZONE = "UTC"


def _normalize_datetime(dt: datetime | date, zone: ZoneInfo | None) -> datetime:
    """Normalize a datetime or date to a UTC datetime.

    For date objects, uses the provided zone (or UTC if none) to determine boundaries.
    For datetime objects, converts to UTC.
    """
    if not isinstance(dt, datetime):
        # Date object: Google uses exclusive end dates, so both edges are midnight
        tz = zone if zone is not None else timezone.utc
        dt = datetime.combine(dt, time.min).replace(tzinfo=tz)
    elif dt.tzinfo is None:
        # Naive datetime: assume provided zone or UTC
        tz = zone if zone is not None else timezone.utc
        dt = dt.replace(tzinfo=tz)
    return dt.astimezone(timezone.utc)


def _to_timestamp(dt: datetime | date, zone: ZoneInfo | None) -> float:
    return _normalize_datetime(dt, zone).timestamp()


def _timestamp_to_datetime(ts: int) -> datetime:
    """Convert a Unix timestamp to a UTC datetime."""
    return datetime.fromtimestamp(ts, tz=timezone.utc)


def _is_all_day_event(gcsa_event: Any) -> bool:
    """Check if a gcsa event is an all-day event.

    Google Calendar uses start.date (not start.dateTime) for all-day events.
    """
    start = getattr(gcsa_event, "start", None)
    if isinstance(start, datetime):
        return False
    if isinstance(start, date):
        return True
    return getattr(start, "date", None) is not None


def _extract_datetime(value: Any) -> datetime | date:
    """Extract the datetime/date from a gcsa start or end value.

    Google Calendar API objects carry dateTime (for timed) or date (for
    all-day); gcsa itself hands back plain datetime/date values.
    """
    if isinstance(value, (datetime, date)):
        return value
    if getattr(value, "dateTime", None) is not None:
        return value.dateTime
    if getattr(value, "date", None) is not None:
        return value.date
    return value


def _event_zone(gcsa_event: Any) -> ZoneInfo:
    name = getattr(gcsa_event, "timezone", None)
    return ZoneInfo(name) if name else ZoneInfo(_UTC_TIMEZONE)


def _convert_event(gcsa_event: Any) -> Event:
    zone = _event_zone(gcsa_event)
    return Event(
        title=gcsa_event.summary,
        start=_to_timestamp(_extract_datetime(gcsa_event.start), zone),
        end=_to_timestamp(_extract_datetime(gcsa_event.end), zone),
        is_all_day=_is_all_day_event(gcsa_event),
        external_id=getattr(gcsa_event, "ical_uid", None),
        instance_id=gcsa_event.id,
    )


class GoogleCalendarSource(EventSource):
    """Event source backed by the Google Calendar API using local credentials.

    Events are converted to UTC timestamps. Each event's own timezone (if
    specified) is used when interpreting all-day events or naive datetimes.
    """

    def __init__(
        self,
        *,
        credentials_path: Path | str | None = None,
        token_path: Path | str | None = None,
        client: GoogleCalendar | None = None,
    ) -> None:
        """Initialize a Google Calendar source.

        Args:
            credentials_path: OAuth client secrets file (gcsa default if None)
            token_path: Where gcsa caches the user token (gcsa default if None)
            client: Optional GoogleCalendar client instance (for testing/reuse)
        """
        self.credentials_path: Path | str | None = credentials_path
        self.token_path: Path | str | None = token_path
        self._client: GoogleCalendar | None = client

    @override
    def __str__(self) -> str:
        return f"GoogleCalendarSource(credentials='{self.credentials_path}')"

    @property
    def client(self) -> GoogleCalendar:
        if self._client is None:
            self.request_access()
        assert self._client is not None  # For type checker
        return self._client

    @override
    def request_access(self) -> None:
        """Authenticate with Google, running the OAuth flow if needed."""
        if self._client is not None:
            return
        kwargs: dict[str, Any] = {"read_only": True}
        if self.credentials_path is not None:
            kwargs["credentials_path"] = str(self.credentials_path)
        if self.token_path is not None:
            kwargs["token_path"] = str(self.token_path)
        try:
            self._client = GoogleCalendar(**kwargs)
        except Exception as e:
            raise AccessDenied(str(e)) from e
        logger.info("Google Calendar access granted")

    @override
    def calendars(self) -> list[CalendarInfo]:
        return sort_calendars(
            [
                CalendarInfo(
                    id=entry.id,
                    title=entry.summary,
                    color=getattr(entry, "background_color", None),
                )
                for entry in self.client.get_calendar_list()
                if entry.id is not None and entry.summary is not None
            ]
        )

    @override
    def events(self, calendar_id: str, start: int, end: int) -> list[Event]:
        if self.find_calendar(calendar_id) is None:
            raise CalendarNotFound(calendar_id)

        fetched = self.client.get_events(  # pyright: ignore[reportUnknownMemberType]
            time_min=_timestamp_to_datetime(start),
            time_max=_timestamp_to_datetime(end),
            single_events=True,
            order_by="startTime",
            calendar_id=calendar_id,
        )

        events: list[Event] = []
        for e in fetched:
            if e.end is None:
                logger.debug("Skipping event %s without an end", e.id)
                continue
            events.append(_convert_event(e))

        logger.info(
            "Fetched %d event(s) from calendar %s", len(events), calendar_id
        )
        return events


__all__ = ["GoogleCalendarSource"]
