"""Tests for duration, union and instance dedup helpers."""

from datetime import datetime, timezone

import pytest

from workhours import (
    Event,
    Interval,
    count_events,
    dedup_by_instance,
    duration,
    total_duration,
    union_duration,
)
from workhours.util import HOUR


def _at(hour: int, minute: int = 0) -> float:
    return datetime(2025, 3, 3, hour, minute, tzinfo=timezone.utc).timestamp()


def _event(start: float, end: float, **kwargs) -> Event:
    return Event(title=kwargs.pop("title", "Shift"), start=start, end=end, **kwargs)


# --- duration ---


def test_duration_is_end_minus_start():
    assert duration(_event(100, 3700)) == 3600


def test_duration_clamps_negative_to_zero():
    """Events ending before they start count as zero, not as an error."""
    assert duration(_event(5000, 1000)) == 0
    assert duration(_event(1000, 1000)) == 0


def test_total_duration_counts_overlaps_twice():
    events = [_event(_at(9), _at(11)), _event(_at(10), _at(12))]
    assert total_duration(events) == 4 * HOUR
    assert count_events(events) == 2


# --- union_duration ---


class TestUnionDuration:
    def test_overlapping_intervals_count_once(self):
        events = [_event(_at(9), _at(11)), _event(_at(10), _at(12))]
        assert union_duration(events) == 3 * HOUR

    def test_empty_input(self):
        assert union_duration([]) == 0

    def test_disjoint_intervals_add_up(self):
        events = [_event(_at(13), _at(14)), _event(_at(9), _at(10))]
        assert union_duration(events) == 2 * HOUR

    def test_touching_intervals_merge(self):
        events = [_event(_at(9), _at(10)), _event(_at(10), _at(11))]
        assert union_duration(events) == 2 * HOUR

    def test_contained_interval_adds_nothing(self):
        events = [_event(_at(8), _at(17)), _event(_at(12), _at(13))]
        assert union_duration(events) == 9 * HOUR

    def test_zero_and_negative_durations_are_dropped(self):
        events = [
            _event(_at(9), _at(9)),
            _event(_at(12), _at(10)),
            _event(_at(14), _at(15)),
        ]
        assert union_duration(events) == HOUR

    def test_unsorted_chain_of_overlaps(self):
        events = [
            _event(_at(11), _at(13)),
            _event(_at(9), _at(10, 30)),
            _event(_at(10), _at(11, 30)),
            _event(_at(15), _at(16)),
        ]
        # 09:00-13:00 plus 15:00-16:00
        assert union_duration(events) == 5 * HOUR


def test_interval_rejects_inverted_bounds():
    with pytest.raises(ValueError, match="must be <="):
        Interval(start=10, end=5)


def test_interval_str_shows_range_and_duration():
    assert str(Interval(start=0, end=5400)) == "Interval(0→5400, 5400s)"


def test_event_to_interval_skips_empty_events():
    assert _event(10, 10).to_interval() is None
    assert _event(10, 5).to_interval() is None
    assert _event(5, 10).to_interval() == Interval(start=5, end=10)


# --- dedup_by_instance ---


class TestDedupByInstance:
    def test_identical_instances_collapse(self):
        a = _event(100, 200, external_id="uid-1")
        b = _event(100, 200, external_id="uid-1")
        assert dedup_by_instance([a, b]) == [a]

    def test_first_occurrence_wins_and_order_is_kept(self):
        first = _event(100, 200, external_id="uid-1", title="First")
        other = _event(300, 400, external_id="uid-2")
        repeat = _event(100, 200, external_id="uid-1", title="Repeat")
        result = dedup_by_instance([first, other, repeat])
        assert result == [first, other]

    def test_instance_id_is_used_without_external_id(self):
        a = _event(100, 200, instance_id="inst-1")
        b = _event(100, 200, instance_id="inst-2")
        c = _event(100, 200, instance_id="inst-1")
        assert dedup_by_instance([a, b, c]) == [a, b]

    def test_external_id_takes_precedence_over_instance_id(self):
        a = _event(100, 200, external_id="uid-1", instance_id="inst-1")
        b = _event(100, 200, external_id="uid-1", instance_id="inst-2")
        assert dedup_by_instance([a, b]) == [a]

    def test_events_without_ids_share_placeholder(self):
        a = _event(100, 200)
        b = _event(100, 200, title="Other")
        assert dedup_by_instance([a, b]) == [a]

    def test_times_compare_in_whole_seconds(self):
        a = _event(100.2, 200.7, external_id="uid-1")
        b = _event(100.9, 200.1, external_id="uid-1")
        c = _event(101.0, 200.0, external_id="uid-1")
        assert dedup_by_instance([a, b, c]) == [a, c]

    def test_different_times_are_kept(self):
        a = _event(100, 200, external_id="uid-1")
        b = _event(100, 300, external_id="uid-1")
        assert dedup_by_instance([a, b]) == [a, b]
