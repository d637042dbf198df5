"""Overall workload-ratio trend across the most recent weeks."""

from collections.abc import Sequence

from pydantic import BaseModel, Field

from loadwatch.analytics.models import OverallTrend, TrendDirection, WeeklyBucket
from loadwatch.config.settings import Settings, get_settings
from loadwatch.core.logging import get_logger
from loadwatch.utils.rounding import round_half_up

logger = get_logger(__name__)

INSUFFICIENT_DATA_DESCRIPTION = "Not enough weekly data to analyse the trend yet."

TREND_DESCRIPTIONS: dict[TrendDirection, str] = {
    TrendDirection.INCREASING: (
        "The workload ratio has risen {percent:.1f}% over the last {weeks} weeks. "
        "Keep a close eye on load management."
    ),
    TrendDirection.DECREASING: (
        "The workload ratio has fallen {percent:.1f}% over the last {weeks} weeks. "
        "Consider reviewing training intensity."
    ),
    TrendDirection.STABLE: (
        "The workload ratio is holding within a stable range. "
        "Load management is on track."
    ),
}


class TrendConfig(BaseModel):
    """Configuration for the overall trend."""

    lookback_weeks: int = Field(
        default_factory=lambda: get_settings().trend.overall_lookback_weeks,
        ge=2,
        le=52,
        description="Most recent weekly buckets compared",
    )
    threshold_percent: float = Field(
        default_factory=lambda: get_settings().trend.overall_percent,
        ge=0.0,
        le=100.0,
        description="First-vs-last change that gives a direction",
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "TrendConfig":
        """Build from application settings."""
        return cls(
            lookback_weeks=settings.trend.overall_lookback_weeks,
            threshold_percent=settings.trend.overall_percent,
        )


class OverallTrendAnalyzer:
    """Compares the first and last of the most recent weekly averages.

    Example:
        trend = OverallTrendAnalyzer().analyze(weekly_buckets)
    """

    def __init__(self, config: TrendConfig | None = None) -> None:
        self.config = config or TrendConfig()

    def analyze(self, weekly: Sequence[WeeklyBucket]) -> OverallTrend:
        """Classify the direction of the recent weekly average ratio.

        Args:
            weekly: Weekly buckets ascending by start date.

        Returns:
            OverallTrend; stable at 0 with fewer than two weeks.
        """
        if len(weekly) < 2:
            return OverallTrend(
                direction=TrendDirection.STABLE,
                percent=0.0,
                description=INSUFFICIENT_DATA_DESCRIPTION,
            )

        window = list(weekly[-self.config.lookback_weeks :])
        first = window[0].average_ratio
        last = window[-1].average_ratio
        change = (last - first) / first * 100 if first else 0.0

        direction = TrendDirection.STABLE
        if abs(change) > self.config.threshold_percent:
            direction = TrendDirection.INCREASING if change > 0 else TrendDirection.DECREASING

        percent = round_half_up(abs(change), 1)
        logger.debug(
            "Overall trend analyzed",
            weeks=len(window),
            direction=direction.value,
            percent=percent,
        )
        return OverallTrend(
            direction=direction,
            percent=percent,
            description=TREND_DESCRIPTIONS[direction].format(
                percent=percent, weeks=self.config.lookback_weeks
            ),
        )
