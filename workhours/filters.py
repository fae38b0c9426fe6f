from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing_extensions import override

from workhours.event import Event


class Filter(ABC):

    @abstractmethod
    def apply(self, event: Event) -> bool:
        pass

    def __call__(self, events: Iterable[Event]) -> list[Event]:
        """Return the events this filter accepts, preserving order."""
        return [e for e in events if self.apply(e)]

    def __or__(self, other: "Filter") -> "Filter":
        if not isinstance(other, Filter):
            raise TypeError(
                f"Cannot union (|) a Filter with {type(other).__name__}.\n"
                f"Hint: Use | to combine filters: (hours >= 2) | (minutes < 30)"
            )
        return Or(self, other)

    def __and__(self, other: "Filter") -> "Filter":
        if not isinstance(other, Filter):
            raise TypeError(
                f"Cannot intersect (&) a Filter with {type(other).__name__}.\n"
                f"Hint: Use & to combine filters: (hours >= 2) & (all_day == False)"
            )
        return And(self, other)

    def __invert__(self) -> "Filter":
        return Not(self)


class Or(Filter):
    def __init__(self, *filters: Filter):
        super().__init__()
        self.filters: tuple[Filter, ...] = filters

    @override
    def apply(self, event: Event) -> bool:
        return any(f.apply(event) for f in self.filters)


class And(Filter):
    def __init__(self, *filters: Filter):
        super().__init__()
        self.filters: tuple[Filter, ...] = filters

    @override
    def apply(self, event: Event) -> bool:
        return all(f.apply(event) for f in self.filters)


class Not(Filter):
    def __init__(self, inner: Filter):
        super().__init__()
        self.inner: Filter = inner

    @override
    def apply(self, event: Event) -> bool:
        return not self.inner.apply(event)


class Everything(Filter):
    """Accepts every event."""

    @override
    def apply(self, event: Event) -> bool:
        return True
