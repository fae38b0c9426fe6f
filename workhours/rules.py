"""Per-instance duration deductions keyed by normalized title.

A rule table maps a normalized title to a ``DeductionRule``. Every event
whose title normalizes to that key and whose raw duration reaches the rule's
threshold has the deduction taken off its duration. All other events keep
their raw duration.

Example:
    >>> from workhours.event import Event
    >>> shift = Event(title="MarryBrown Dandenong (PC)", start=0, end=18000)
    >>> adjusted_duration(shift)
    16200.0
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from workhours.event import Event
from workhours.filters import Filter
from workhours.metrics import duration
from workhours.normalize import normalize_title
from workhours.properties import seconds
from workhours.util import HOUR, MINUTE


@dataclass(frozen=True, kw_only=True)
class DeductionRule:
    """Deduct a fixed amount from instances lasting at least ``threshold``.

    Attributes:
        threshold: Minimum raw duration (seconds) for the deduction to apply
        deduction: Seconds removed from each qualifying instance
    """

    threshold: float
    deduction: float

    def __post_init__(self) -> None:
        if self.threshold < 0 or self.deduction < 0:
            raise ValueError(
                f"DeductionRule threshold and deduction must be >= 0.\n"
                f"Got threshold={self.threshold}, deduction={self.deduction}"
            )

    @property
    def qualifies(self) -> Filter:
        return seconds >= self.threshold

    def adjust(self, event: Event) -> float:
        raw = duration(event)
        if self.qualifies.apply(event):
            return max(0.0, raw - self.deduction)
        return raw


RuleTable = Mapping[str, DeductionRule]


def rule_table(rules: Mapping[str, DeductionRule]) -> RuleTable:
    """Build a read-only rule table, normalizing the title keys."""
    return MappingProxyType({normalize_title(k): v for k, v in rules.items()})


DEFAULT_RULES: RuleTable = rule_table(
    {
        "MarryBrown Dandenong (PC)": DeductionRule(
            threshold=5 * HOUR, deduction=30 * MINUTE
        ),
    }
)


def rule_for(event: Event, rules: RuleTable = DEFAULT_RULES) -> DeductionRule | None:
    return rules.get(normalize_title(event.title))


def adjusted_duration(event: Event, rules: RuleTable = DEFAULT_RULES) -> float:
    """Return the event's duration after any title-specific deduction."""
    rule = rule_for(event, rules)
    if rule is None:
        return duration(event)
    return rule.adjust(event)
