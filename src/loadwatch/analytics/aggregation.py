"""Weekly and monthly bucketing of ratio points.

This module provides:
- WeeklyAggregator: Monday-to-Sunday buckets with a 5% trend threshold
- MonthlyAggregator: calendar-month buckets with a 10% trend threshold and
  a nested weekly breakdown of each month

Within a bucket the trend compares the mean ratio of the earliest half of
the points (rounded up) against the mean of the remaining points.
"""

import math
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import asdict

from pydantic import BaseModel, Field

from loadwatch.analytics.calendar import month_label, week_date_range, week_key
from loadwatch.analytics.models import (
    BucketStats,
    MonthlyBucket,
    RatioPoint,
    TrendDirection,
    WeeklyBucket,
)
from loadwatch.config.settings import Settings, get_settings
from loadwatch.core.logging import get_logger
from loadwatch.utils.rounding import round_half_up

logger = get_logger(__name__)


# =============================================================================
# Configuration
# =============================================================================


class AggregatorConfig(BaseModel):
    """Configuration for bucket trend classification."""

    weekly_trend_percent: float = Field(
        default_factory=lambda: get_settings().trend.weekly_percent,
        ge=0.0,
        le=100.0,
        description="Half-vs-half change that gives a week a direction",
    )
    monthly_trend_percent: float = Field(
        default_factory=lambda: get_settings().trend.monthly_percent,
        ge=0.0,
        le=100.0,
        description="Half-vs-half change that gives a month a direction",
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AggregatorConfig":
        """Build from application settings."""
        return cls(
            weekly_trend_percent=settings.trend.weekly_percent,
            monthly_trend_percent=settings.trend.monthly_percent,
        )


# =============================================================================
# Shared statistics
# =============================================================================


def half_split_trend(
    values: Sequence[float], threshold_percent: float
) -> tuple[TrendDirection, float]:
    """Classify the change between the first and second half of ``values``.

    Returns:
        Direction and the absolute percent change rounded to 1 decimal.
        A single value, or a zero first-half mean, is stable at 0.
    """
    split = math.ceil(len(values) / 2)
    first, second = values[:split], values[split:]
    if not first or not second:
        return TrendDirection.STABLE, 0.0

    first_avg = sum(first) / len(first)
    second_avg = sum(second) / len(second)
    if first_avg == 0:
        return TrendDirection.STABLE, 0.0

    change = (second_avg - first_avg) / first_avg * 100
    direction = TrendDirection.STABLE
    if abs(change) > threshold_percent:
        direction = TrendDirection.INCREASING if change > 0 else TrendDirection.DECREASING
    return direction, round_half_up(abs(change), 1)


def summarize_points(
    points: Sequence[RatioPoint], threshold_percent: float
) -> BucketStats | None:
    """Compute bucket statistics, or None when no point has a positive ratio.

    ``total_load`` adds each member's acute and chronic loads. Both are
    daily averages, so the figure is not a raw load total.
    """
    ratios = [p.ratio for p in points if p.ratio > 0]
    if not ratios:
        return None

    direction, percent = half_split_trend(ratios, threshold_percent)
    return BucketStats(
        average_ratio=round_half_up(sum(ratios) / len(ratios), 2),
        max_ratio=round_half_up(max(ratios), 2),
        min_ratio=round_half_up(min(ratios), 2),
        total_load=round_half_up(sum(p.acute_load + p.chronic_load for p in points), 1),
        active_days=len(points),
        risk_days=sum(1 for p in points if p.is_risky),
        trend_direction=direction,
        trend_percent=percent,
    )


# =============================================================================
# Aggregators
# =============================================================================


class WeeklyAggregator:
    """Groups ratio points into Monday-to-Sunday weeks.

    Example:
        weeks = WeeklyAggregator().aggregate(points)
    """

    def __init__(self, config: AggregatorConfig | None = None) -> None:
        self.config = config or AggregatorConfig()

    def aggregate(self, points: Sequence[RatioPoint]) -> list[WeeklyBucket]:
        """Build weekly buckets ascending by start date.

        Args:
            points: Ratio points; members keep their date order.

        Returns:
            One bucket per week that holds at least one positive ratio.
        """
        by_week: dict[tuple[int, int], list[RatioPoint]] = defaultdict(list)
        for point in sorted(points, key=lambda p: p.date):
            by_week[week_key(point.date)].append(point)

        buckets: list[WeeklyBucket] = []
        for (year, number), members in sorted(by_week.items()):
            stats = summarize_points(members, self.config.weekly_trend_percent)
            if stats is None:
                logger.debug("Week without positive ratios dropped", year=year, week=number)
                continue
            start, end = week_date_range(year, number)
            buckets.append(
                WeeklyBucket(
                    year=year,
                    week_number=number,
                    start_date=start,
                    end_date=end,
                    **asdict(stats),
                )
            )
        return buckets


class MonthlyAggregator:
    """Groups ratio points into calendar months with a weekly breakdown.

    Example:
        months = MonthlyAggregator().aggregate(points)
    """

    def __init__(
        self,
        config: AggregatorConfig | None = None,
        weekly: WeeklyAggregator | None = None,
    ) -> None:
        self.config = config or AggregatorConfig()
        self.weekly = weekly or WeeklyAggregator(self.config)

    def aggregate(self, points: Sequence[RatioPoint]) -> list[MonthlyBucket]:
        """Build monthly buckets ascending by (year, month).

        Each bucket's ``weekly_breakdown`` re-runs the weekly aggregation on
        that month's points only, so a week straddling two months appears in
        both breakdowns with different members.
        """
        by_month: dict[tuple[int, int], list[RatioPoint]] = defaultdict(list)
        for point in sorted(points, key=lambda p: p.date):
            by_month[(point.date.year, point.date.month)].append(point)

        buckets: list[MonthlyBucket] = []
        for (year, month), members in sorted(by_month.items()):
            stats = summarize_points(members, self.config.monthly_trend_percent)
            if stats is None:
                logger.debug("Month without positive ratios dropped", year=year, month=month)
                continue
            buckets.append(
                MonthlyBucket(
                    year=year,
                    month=month,
                    month_label=month_label(month),
                    weekly_breakdown=tuple(self.weekly.aggregate(members)),
                    **asdict(stats),
                )
            )
        return buckets
