"""Tests for event properties and composable filters."""

import pytest

from workhours import Event, all_day, hours, minutes, one_of, seconds, title
from workhours.filters import Everything


def _event(**kwargs) -> Event:
    kwargs.setdefault("start", 0)
    kwargs.setdefault("end", 3600)
    return Event(**kwargs)


def test_duration_properties_scale_units():
    event = _event(start=0, end=5400)
    assert (hours == 1.5).apply(event)
    assert (minutes == 90).apply(event)
    assert (seconds >= 5400).apply(event)
    assert not (seconds > 5400).apply(event)


def test_duration_property_clamps_negative_lengths():
    assert (seconds == 0).apply(_event(start=100, end=0))


def test_title_comparison_is_normalized():
    event = _event(title="  Night Shift ")
    assert (title == "NIGHT SHIFT").apply(event)
    assert not (title != "night shift").apply(event)


def test_untitled_events_match_untitled_key():
    assert (title == "(untitled)").apply(_event(title=None))
    assert (title == "").apply(_event(title="   "))


def test_one_of_normalizes_titles():
    event = _event(title="Lunch")
    assert one_of(title, ["LUNCH", "Dinner"]).apply(event)
    assert not one_of(title, ["Breakfast"]).apply(event)


def test_filters_combine_with_and_or_not():
    long_shift = _event(title="Shift", end=6 * 3600)
    short_shift = _event(title="Shift", end=3600)
    holiday = _event(title="Holiday", end=86400, is_all_day=True)

    long_timed = (hours >= 5) & (all_day == False)  # noqa: E712
    assert long_timed.apply(long_shift)
    assert not long_timed.apply(short_shift)
    assert not long_timed.apply(holiday)

    either = (title == "holiday") | (hours < 2)
    assert either.apply(holiday)
    assert either.apply(short_shift)
    assert not either.apply(long_shift)

    assert (~either).apply(long_shift)


def test_filter_call_selects_in_order():
    events = [
        _event(title="a", is_all_day=True),
        _event(title="b"),
        _event(title="c", is_all_day=True),
        _event(title="d"),
    ]
    timed = all_day == False  # noqa: E712
    assert [e.title for e in timed(events)] == ["b", "d"]
    assert len(Everything()(events)) == 4


def test_filter_rejects_non_filter_operands():
    with pytest.raises(TypeError, match="Cannot union"):
        (hours >= 1) | 5
    with pytest.raises(TypeError, match="Cannot intersect"):
        (hours >= 1) & "shift"
