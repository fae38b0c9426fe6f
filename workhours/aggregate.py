"""Group events by normalized title and total their adjusted durations."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from workhours.event import Event
from workhours.filters import Everything, Filter
from workhours.metrics import duration
from workhours.normalize import display_title, normalize_title
from workhours.properties import all_day
from workhours.rules import DEFAULT_RULES, DeductionRule, RuleTable, rule_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class TitleGroup:
    """All events sharing one normalized title.

    Attributes:
        key: Normalized title, unique within a summary
        display_title: Presentable title taken from the first member
        count: Number of member instances
        total_seconds: Sum of adjusted member durations
        raw_seconds: Sum of member durations before deductions
    """

    key: str
    display_title: str
    count: int
    total_seconds: float
    raw_seconds: float


@dataclass(frozen=True)
class Summary:
    groups: tuple[TitleGroup, ...]
    total_seconds: float

    @property
    def unique_titles(self) -> int:
        return len(self.groups)

    def __getitem__(self, key: str) -> TitleGroup:
        """Look up a group by title (any case or surrounding whitespace)."""
        norm = normalize_title(key)
        for group in self.groups:
            if group.key == norm:
                return group
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        norm = normalize_title(key)
        return any(group.key == norm for group in self.groups)


@dataclass(frozen=True, kw_only=True)
class DeductionTrace:
    """One rule evaluation, reported to the ``trace`` callback of ``aggregate``.

    ``index`` is the instance's position within its group, starting at 1.
    """

    key: str
    index: int
    event: Event
    raw_seconds: float
    adjusted_seconds: float
    rule: DeductionRule

    @property
    def deducted(self) -> bool:
        return self.adjusted_seconds != self.raw_seconds


TraceCallback = Callable[[DeductionTrace], None]


def _group(events: Iterable[Event]) -> dict[str, list[Event]]:
    buckets: dict[str, list[Event]] = {}
    for event in events:
        buckets.setdefault(normalize_title(event.title), []).append(event)
    return buckets


def _build_group(
    key: str,
    members: list[Event],
    rules: RuleTable,
    trace: TraceCallback | None,
) -> TitleGroup:
    rule = rules.get(key)
    raw_total = 0.0
    adjusted_total = 0.0

    for idx, event in enumerate(members, start=1):
        raw = duration(event)
        raw_total += raw
        if rule is None:
            adjusted_total += raw
            continue

        adjusted = rule.adjust(event)
        adjusted_total += adjusted
        record = DeductionTrace(
            key=key,
            index=idx,
            event=event,
            raw_seconds=raw,
            adjusted_seconds=adjusted,
            rule=rule,
        )
        logger.debug(
            "%s #%02d %s -> %s %.2fh | %s",
            key,
            idx,
            event.start,
            event.end,
            raw / 3600,
            f"deduction -{rule.deduction / 3600:.2f}h -> {adjusted / 3600:.2f}h"
            if record.deducted
            else "no deduction",
        )
        if trace is not None:
            trace(record)

    if rule is not None:
        logger.debug(
            "%s: %d instance(s), raw total %.2fh, adjusted total %.2fh",
            key,
            len(members),
            raw_total / 3600,
            adjusted_total / 3600,
        )

    return TitleGroup(
        key=key,
        display_title=display_title(members[0].title, key),
        count=len(members),
        total_seconds=adjusted_total,
        raw_seconds=raw_total,
    )


def aggregate(
    events: Iterable[Event],
    include_all_day: bool = False,
    *,
    rules: RuleTable = DEFAULT_RULES,
    trace: TraceCallback | None = None,
) -> Summary:
    """Summarize events per distinct title.

    Args:
        events: Event instances, in any order
        include_all_day: When False, all-day events are dropped first
        rules: Title-keyed deduction rules applied per instance
        trace: Optional callback receiving one ``DeductionTrace`` per
            instance whose title has a rule

    Returns:
        Summary with groups sorted case-insensitively by display title and
        the grand total of adjusted seconds

    Example:
        >>> summary = aggregate([
        ...     Event(title="Shift", start=0, end=3600),
        ...     Event(title=" shift ", start=7200, end=9000),
        ... ])
        >>> summary.groups[0].count, summary.total_seconds
        (2, 5400.0)
    """
    keep: Filter = Everything() if include_all_day else (all_day == False)  # noqa: E712
    selected = keep(events)
    table = rule_table(rules)

    groups = [
        _build_group(key, members, table, trace)
        for key, members in _group(selected).items()
    ]
    groups.sort(key=lambda g: g.display_title.lower())

    total = sum((g.total_seconds for g in groups), 0.0)
    logger.debug(
        "Aggregated %d event(s) into %d group(s), total %.0fs",
        len(selected),
        len(groups),
        total,
    )
    return Summary(groups=tuple(groups), total_seconds=total)
