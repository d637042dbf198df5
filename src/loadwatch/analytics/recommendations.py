"""Rule-based training recommendations.

Each rule contributes a fixed group of messages when its predicate holds.
Rules are derived from the buckets directly; insights are passed through
for callers that extend the table but the default rules do not read them.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from pydantic import BaseModel, Field

from loadwatch.analytics.models import Insight, MonthlyBucket, TrendDirection, WeeklyBucket
from loadwatch.analytics.rules import RuleContext
from loadwatch.config.settings import Settings, get_settings
from loadwatch.core.logging import get_logger

logger = get_logger(__name__)

ONBOARDING_RECOMMENDATIONS: tuple[str, ...] = (
    "Start logging your training sessions every day.",
    "Aim for 4-6 training days per week.",
    "Record session RPE and duration accurately.",
)

CLOSING_RECOMMENDATIONS: tuple[str, ...] = (
    "Keep logging every session so the analysis stays accurate.",
    "Adjust the plan flexibly based on how fatigued and fit you feel.",
)


class RecommendationConfig(BaseModel):
    """Configuration for recommendation rules."""

    high_average_ratio: float = Field(
        default_factory=lambda: get_settings().recommendation.high_average_ratio,
        gt=0.0,
        le=5.0,
        description="Weekly average above which intensity should come down",
    )
    low_average_ratio: float = Field(
        default_factory=lambda: get_settings().recommendation.low_average_ratio,
        ge=0.0,
        le=5.0,
        description="Weekly average below which intensity should go up",
    )
    maintain_average_ratio: float = Field(
        default_factory=lambda: get_settings().recommendation.maintain_average_ratio,
        gt=0.0,
        le=5.0,
        description="Upper end of the maintain-load range",
    )
    max_risk_days: int = Field(
        default_factory=lambda: get_settings().recommendation.max_risk_days,
        ge=0,
        le=7,
        description="Risk days in a week above which the plan needs review",
    )
    max_ratio_spread: float = Field(
        default_factory=lambda: get_settings().recommendation.max_ratio_spread,
        ge=0.0,
        le=10.0,
        description="Weekly max-min ratio spread above which intensity is uneven",
    )
    min_active_days: int = Field(
        default_factory=lambda: get_settings().recommendation.min_active_days,
        ge=0,
        le=7,
        description="Active days below which training should be more frequent",
    )
    max_active_days: int = Field(
        default_factory=lambda: get_settings().recommendation.max_active_days,
        ge=0,
        le=7,
        description="Active days above which a rest day is needed",
    )
    rapid_trend_percent: float = Field(
        default_factory=lambda: get_settings().recommendation.rapid_trend_percent,
        ge=0.0,
        le=100.0,
        description="Rising weekly trend above which load jumps are flagged",
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecommendationConfig":
        """Build from application settings."""
        return cls(**settings.recommendation.model_dump())


@dataclass(frozen=True)
class RecommendationRule:
    """One entry of the recommendation table."""

    name: str
    applies: Callable[[RuleContext, RecommendationConfig], bool]
    messages: tuple[str, ...]


RECOMMENDATION_RULES: tuple[RecommendationRule, ...] = (
    # Intensity rules are mutually exclusive; with the default cut-offs an
    # average in (1.3, 1.5] matches none
    RecommendationRule(
        name="reduce_intensity",
        applies=lambda ctx, cfg: ctx.recent.average_ratio > cfg.high_average_ratio,
        messages=(
            "The ratio is high: reduce training intensity gradually.",
            "Add recovery days and include light aerobic work.",
        ),
    ),
    RecommendationRule(
        name="increase_intensity",
        applies=lambda ctx, cfg: ctx.recent.average_ratio < cfg.low_average_ratio,
        messages=(
            "The ratio is low: increase training intensity gradually.",
            "Consider adding 1-2 training days per week.",
        ),
    ),
    RecommendationRule(
        name="maintain_load",
        applies=lambda ctx, cfg: (
            cfg.low_average_ratio <= ctx.recent.average_ratio <= cfg.maintain_average_ratio
        ),
        messages=("The current training load is in the optimal range. Keep it up.",),
    ),
    RecommendationRule(
        name="review_plan",
        applies=lambda ctx, cfg: ctx.recent.risk_days > cfg.max_risk_days,
        messages=(
            "There were many high-risk days: review the training plan.",
            "Talk to a coach or trainer about individual load adjustments.",
        ),
    ),
    RecommendationRule(
        name="increase_frequency",
        applies=lambda ctx, cfg: ctx.recent.active_days < cfg.min_active_days,
        messages=("Train more often, aiming for 4-6 days per week.",),
    ),
    RecommendationRule(
        name="rest_day",
        applies=lambda ctx, cfg: ctx.recent.active_days > cfg.max_active_days,
        messages=("Training frequency is high: make sure to schedule rest days.",),
    ),
    RecommendationRule(
        name="avoid_rapid_increase",
        applies=lambda ctx, cfg: (
            ctx.recent.trend_direction == TrendDirection.INCREASING
            and ctx.recent.trend_percent > cfg.rapid_trend_percent
        ),
        messages=("The ratio is trending upward: avoid sudden jumps in load.",),
    ),
    RecommendationRule(
        name="consistent_intensity",
        applies=lambda ctx, cfg: ctx.recent.ratio_spread > cfg.max_ratio_spread,
        messages=("The ratio swings widely: aim for more consistent training intensity.",),
    ),
)


class RecommendationGenerator:
    """Evaluates the recommendation table against the latest week.

    Example:
        recommendations = RecommendationGenerator().generate(weekly, monthly, insights)
    """

    def __init__(
        self,
        config: RecommendationConfig | None = None,
        rules: Sequence[RecommendationRule] = RECOMMENDATION_RULES,
    ) -> None:
        self.config = config or RecommendationConfig()
        self.rules = tuple(rules)

    def generate(
        self,
        weekly: Sequence[WeeklyBucket],
        monthly: Sequence[MonthlyBucket],
        insights: Sequence[Insight] = (),
    ) -> list[str]:
        """Produce recommendations in rule order.

        Args:
            weekly: Weekly buckets ascending by start date.
            monthly: Monthly buckets ascending by (year, month).
            insights: Insights already generated for the same buckets.

        Returns:
            Onboarding advice for an empty history, otherwise the messages of
            every matching rule followed by the closing advice.
        """
        if not weekly:
            return list(ONBOARDING_RECOMMENDATIONS)

        ctx = RuleContext(weekly=weekly, monthly=monthly, insights=insights)
        recommendations: list[str] = []
        matched: list[str] = []
        for rule in self.rules:
            if rule.applies(ctx, self.config):
                matched.append(rule.name)
                recommendations.extend(rule.messages)
        recommendations.extend(CLOSING_RECOMMENDATIONS)

        logger.debug("Recommendations generated", rules=matched, count=len(recommendations))
        return recommendations
