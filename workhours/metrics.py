"""Duration metrics over collections of events.

``duration`` is the building block used by the aggregation engine. The other
helpers are standalone: ``union_duration`` counts overlapping time once and
``dedup_by_instance`` drops repeated copies of the same event instance.
"""

from collections.abc import Iterable

from workhours.event import Event
from workhours.interval import Interval


def duration(event: Event) -> float:
    """Return the event's length in seconds, clamped to zero."""
    return max(0.0, event.end - event.start)


def total_duration(events: Iterable[Event]) -> float:
    """Sum of event durations. Overlapping time is counted once per event."""
    return sum((duration(e) for e in events), 0.0)


def count_events(events: Iterable[Event]) -> int:
    return sum(1 for _ in events)


def _instance_key(event: Event) -> tuple[str, int, int]:
    uid = event.external_id or event.instance_id or "NA"
    return uid, int(event.start), int(event.end)


def dedup_by_instance(events: Iterable[Event]) -> list[Event]:
    """Drop events that repeat an already seen instance.

    Two events are the same instance when their identifier (external id,
    falling back to instance id, falling back to ``"NA"``) and their whole-second
    start and end all match. The first occurrence wins and order is preserved.

    Example:
        >>> a = Event(title="Shift", start=0, end=3600, external_id="x")
        >>> len(dedup_by_instance([a, a]))
        1
    """
    seen: set[tuple[str, int, int]] = set()
    unique: list[Event] = []
    for event in events:
        key = _instance_key(event)
        if key in seen:
            continue
        seen.add(key)
        unique.append(event)
    return unique


def union_duration(events: Iterable[Event]) -> float:
    """Return the total time covered by events, counting overlaps once.

    Algorithm: Sort the non-empty intervals by start and sweep, keeping one
    "current" merged interval. An interval starting at or before the current
    end extends it; anything later flushes the current interval into the
    total and becomes the new current one.

    Example:
        >>> nine_to_eleven = Event(start=9 * 3600, end=11 * 3600)
        >>> ten_to_noon = Event(start=10 * 3600, end=12 * 3600)
        >>> union_duration([nine_to_eleven, ten_to_noon])
        10800.0
    """
    intervals = sorted(
        (ivl for ivl in (e.to_interval() for e in events) if ivl is not None),
        key=lambda ivl: ivl.start,
    )
    if not intervals:
        return 0.0

    total = 0.0
    current = intervals[0]
    for ivl in intervals[1:]:
        if ivl.start <= current.end:
            current = Interval(start=current.start, end=max(current.end, ivl.end))
        else:
            total += current.duration
            current = ivl
    total += current.duration
    return total
