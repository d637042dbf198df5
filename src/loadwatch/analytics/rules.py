"""Evaluation context shared by the insight and recommendation rule tables.

Rules are plain ``(name, predicate, output)`` entries evaluated top to
bottom; the order of a table is the order of its output.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from loadwatch.analytics.models import Insight, MonthlyBucket, WeeklyBucket


@dataclass(frozen=True)
class RuleContext:
    """Inputs visible to every rule predicate."""

    weekly: Sequence[WeeklyBucket]
    monthly: Sequence[MonthlyBucket] = ()
    insights: Sequence[Insight] = field(default_factory=tuple)

    @property
    def recent(self) -> WeeklyBucket:
        """Most recent weekly bucket. Only valid when ``weekly`` is non-empty."""
        return self.weekly[-1]

    @property
    def previous_month(self) -> MonthlyBucket | None:
        return self.monthly[-2] if len(self.monthly) >= 2 else None

    @property
    def monthly_change_percent(self) -> float | None:
        """Signed change of the last month's average against the one before."""
        previous = self.previous_month
        if previous is None or previous.average_ratio == 0:
            return None
        current = self.monthly[-1]
        return (current.average_ratio - previous.average_ratio) / previous.average_ratio * 100
