"""Rule-based insights about the most recent training week and month.

Rules are evaluated in table order and every matching rule contributes one
insight, except that an empty weekly history short-circuits to a single
insufficient-data insight.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from pydantic import BaseModel, Field

from loadwatch.analytics.models import Insight, InsightCategory, MonthlyBucket, WeeklyBucket
from loadwatch.analytics.rules import RuleContext
from loadwatch.config.settings import Settings, get_settings
from loadwatch.core.logging import get_logger
from loadwatch.utils.rounding import round_half_up

logger = get_logger(__name__)

MAX_RISK_DAYS = 3
MAX_RATIO_SPREAD = 1.0
MIN_ACTIVE_DAYS = 3
BALANCED_ACTIVE_DAYS = 5
BALANCED_RATIO_BELOW = 1.3

INSUFFICIENT_DATA_INSIGHT = Insight(
    category=InsightCategory.NEUTRAL,
    title="Not enough data",
    description="Not enough training history has been logged yet. Keep recording every session.",
)


class InsightConfig(BaseModel):
    """Configuration for insight generation."""

    monthly_change_percent: float = Field(
        default_factory=lambda: get_settings().trend.monthly_insight_percent,
        ge=0.0,
        le=100.0,
        description="Month-over-month change that produces an insight",
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "InsightConfig":
        """Build from application settings."""
        return cls(monthly_change_percent=settings.trend.monthly_insight_percent)


@dataclass(frozen=True)
class InsightRule:
    """One entry of the insight table."""

    name: str
    applies: Callable[[RuleContext, InsightConfig], bool]
    build: Callable[[RuleContext], Insight]


def _risk_days(ctx: RuleContext) -> Insight:
    days = ctx.recent.risk_days
    return Insight(
        category=InsightCategory.WARNING,
        title="Many high-risk days",
        description=f"The most recent week had {days} days in the caution or high risk band.",
        value=days,
        comparison_label="recommended ≤ 2/week",
    )


def _ratio_spread(ctx: RuleContext) -> Insight:
    spread = round_half_up(ctx.recent.ratio_spread, 2)
    return Insight(
        category=InsightCategory.WARNING,
        title="Large ratio swings",
        description=f"The ratio varied by {spread:.2f} within the most recent week.",
        value=spread,
        comparison_label="recommended ≤ 0.5",
    )


def _low_frequency(ctx: RuleContext) -> Insight:
    days = ctx.recent.active_days
    return Insight(
        category=InsightCategory.WARNING,
        title="Low training frequency",
        description=f"Only {days} training days were logged in the most recent week.",
        value=days,
        comparison_label="recommended 4–6/week",
    )


def _balanced_week(ctx: RuleContext) -> Insight:
    recent = ctx.recent
    return Insight(
        category=InsightCategory.POSITIVE,
        title="Well-balanced training",
        description=(
            f"{recent.active_days} training days this week while holding the ratio "
            f"at {recent.average_ratio}."
        ),
        value=recent.average_ratio,
    )


def _monthly_change(ctx: RuleContext) -> Insight:
    change = ctx.monthly_change_percent or 0.0
    previous = ctx.previous_month
    rising = change > 0
    percent = round_half_up(abs(change), 1)
    return Insight(
        category=InsightCategory.WARNING if rising else InsightCategory.NEUTRAL,
        title="Monthly ratio change",
        description=(
            f"The ratio {'rose' if rising else 'fell'} {percent:.1f}% compared with last month."
        ),
        value=percent,
        comparison_label=f"previous month: {previous.average_ratio}" if previous else None,
    )


INSIGHT_RULES: tuple[InsightRule, ...] = (
    InsightRule(
        name="risk_days",
        applies=lambda ctx, cfg: ctx.recent.risk_days > MAX_RISK_DAYS,
        build=_risk_days,
    ),
    InsightRule(
        name="ratio_spread",
        applies=lambda ctx, cfg: ctx.recent.ratio_spread > MAX_RATIO_SPREAD,
        build=_ratio_spread,
    ),
    InsightRule(
        name="low_frequency",
        applies=lambda ctx, cfg: ctx.recent.active_days < MIN_ACTIVE_DAYS,
        build=_low_frequency,
    ),
    # Cannot co-fire with low_frequency: 5+ active days is never below 3
    InsightRule(
        name="balanced_week",
        applies=lambda ctx, cfg: (
            ctx.recent.active_days >= BALANCED_ACTIVE_DAYS
            and ctx.recent.average_ratio < BALANCED_RATIO_BELOW
        ),
        build=_balanced_week,
    ),
    InsightRule(
        name="monthly_change",
        applies=lambda ctx, cfg: (
            ctx.monthly_change_percent is not None
            and abs(ctx.monthly_change_percent) > cfg.monthly_change_percent
        ),
        build=_monthly_change,
    ),
)


class InsightGenerator:
    """Evaluates the insight table against the latest buckets.

    Example:
        insights = InsightGenerator().generate(weekly, monthly)
    """

    def __init__(
        self,
        config: InsightConfig | None = None,
        rules: Sequence[InsightRule] = INSIGHT_RULES,
    ) -> None:
        self.config = config or InsightConfig()
        self.rules = tuple(rules)

    def generate(
        self,
        weekly: Sequence[WeeklyBucket],
        monthly: Sequence[MonthlyBucket],
    ) -> list[Insight]:
        """Produce insights in rule order.

        Args:
            weekly: Weekly buckets ascending by start date.
            monthly: Monthly buckets ascending by (year, month).
        """
        if not weekly:
            return [INSUFFICIENT_DATA_INSIGHT]

        ctx = RuleContext(weekly=weekly, monthly=monthly)
        insights = [rule.build(ctx) for rule in self.rules if rule.applies(ctx, self.config)]
        logger.debug(
            "Insights generated",
            count=len(insights),
            categories=[i.category.value for i in insights],
        )
        return insights
