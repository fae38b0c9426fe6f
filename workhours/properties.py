import operator as op
from collections.abc import Iterable
from typing import Any, Callable, Hashable, Literal

from typing_extensions import override

from workhours.filters import Filter
from workhours.event import Event
from workhours.metrics import duration
from workhours.normalize import normalize_title
from workhours.util import DAY, HOUR, MINUTE, SECOND


class Operator(Filter):
    def __init__(
        self,
        left: "Property | Any",
        right: "Property | Any",
        operator: Callable[[Any, Any], bool],
    ):
        self.left: "Property | Any" = left
        self.right: "Property | Any" = right
        self.operator: Callable[[Any, Any], bool] = operator

    @override
    def apply(self, event: Event) -> bool:
        left_val = (
            self.left.apply(event) if isinstance(self.left, Property) else self.left
        )
        right_val = (
            self.right.apply(event) if isinstance(self.right, Property) else self.right
        )
        return self.operator(left_val, right_val)


class Property:
    def apply(self, event: Event) -> Any:
        raise NotImplementedError

    def __ge__(self, other: "Property | Any") -> Operator:
        return Operator(self, other, op.ge)

    def __le__(self, other: "Property | Any") -> Operator:
        return Operator(self, other, op.le)

    def __gt__(self, other: "Property | Any") -> Operator:
        return Operator(self, other, op.gt)

    def __lt__(self, other: "Property | Any") -> Operator:
        return Operator(self, other, op.lt)

    @override
    def __eq__(  # pyright: ignore[reportIncompatibleMethodOverride]
        self, other: Any
    ) -> Operator:
        return Operator(self, other, op.eq)

    @override
    def __ne__(  # pyright: ignore[reportIncompatibleMethodOverride]
        self,
        other: Any,
    ) -> Operator:
        return Operator(self, other, op.ne)


SCALES = {
    "seconds": SECOND,
    "minutes": MINUTE,
    "hours": HOUR,
    "days": DAY,
}


class Duration(Property):
    """Clamped event length in the given unit."""

    def __init__(self, unit: Literal["seconds", "minutes", "hours", "days"]):
        self.scale: int = SCALES[unit]

    @override
    def apply(self, event: Event) -> float:
        return duration(event) / self.scale


class Title(Property):
    """Normalized title, so comparisons ignore case and surrounding whitespace."""

    @override
    def apply(self, event: Event) -> str:
        return normalize_title(event.title)

    @override
    def __eq__(self, other: Any) -> Operator:  # pyright: ignore[reportIncompatibleMethodOverride]
        if isinstance(other, str):
            other = normalize_title(other)
        return Operator(self, other, op.eq)

    @override
    def __ne__(self, other: Any) -> Operator:  # pyright: ignore[reportIncompatibleMethodOverride]
        if isinstance(other, str):
            other = normalize_title(other)
        return Operator(self, other, op.ne)


class AllDay(Property):
    @override
    def apply(self, event: Event) -> bool:
        return event.is_all_day


days: Duration = Duration("days")
hours: Duration = Duration("hours")
minutes: Duration = Duration("minutes")
seconds: Duration = Duration("seconds")
title: Title = Title()
all_day: AllDay = AllDay()


def one_of(property: Property, values: Iterable[Hashable]) -> Operator:
    if isinstance(property, Title):
        values = (normalize_title(v) if isinstance(v, str) else v for v in values)
    return Operator(set(values), property, op.contains)
