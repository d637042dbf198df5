"""Workload analysis entry point.

Runs the full pipeline for one athlete:

    records -> ratio points -> weekly / monthly buckets -> overall trend
            -> insights -> recommendations -> alerts

The engine holds no state between runs. The injected clock only supplies
the ``as_of`` date, the readiness figures, the alerts and the suggested
supplier lookback; ratio and bucket values depend on the records alone.
"""

from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from loadwatch.analytics.aggregation import AggregatorConfig, MonthlyAggregator, WeeklyAggregator
from loadwatch.analytics.alerts import AlertConfig, AlertEvaluator
from loadwatch.analytics.insights import InsightConfig, InsightGenerator
from loadwatch.analytics.models import AnalysisResult, WorkloadRecord
from loadwatch.analytics.ratio import RatioCalculator
from loadwatch.analytics.readiness import assess_readiness
from loadwatch.analytics.recommendations import RecommendationConfig, RecommendationGenerator
from loadwatch.analytics.records import merge_daily_records, parse_records
from loadwatch.analytics.trends import OverallTrendAnalyzer, TrendConfig
from loadwatch.config.settings import Settings, get_settings
from loadwatch.core.clock import Clock, FixedOffsetClock, months_before
from loadwatch.core.logging import get_logger

logger = get_logger(__name__)

RecordInput = Mapping[str, Any] | WorkloadRecord


class WorkloadAnalyzer:
    """Runs every analysis stage from ratios through alerts.

    Example:
        analyzer = WorkloadAnalyzer(clock=FrozenClock(date(2025, 3, 1)))
        result = analyzer.analyze([
            {"date": "2025-02-01", "load": 420},
            {"date": "2025-02-02", "rpe": 6, "duration_min": 75},
        ])
        result.to_dict()
    """

    def __init__(
        self,
        clock: Clock | None = None,
        settings: Settings | None = None,
        aggregator_config: AggregatorConfig | None = None,
        trend_config: TrendConfig | None = None,
        insight_config: InsightConfig | None = None,
        recommendation_config: RecommendationConfig | None = None,
        alert_config: AlertConfig | None = None,
    ) -> None:
        """Initialize analyzer.

        Args:
            clock: Civil clock; defaults to the configured fixed UTC offset.
            settings: Settings override (default: cached global settings).
            aggregator_config: Weekly/monthly trend thresholds.
            trend_config: Overall trend window and threshold.
            insight_config: Insight thresholds.
            recommendation_config: Recommendation cut-offs.
            alert_config: Alert thresholds.
        """
        self.settings = settings or get_settings()
        self.clock = clock or FixedOffsetClock(self.settings.utc_offset_hours)

        self.ratio_calculator = RatioCalculator()
        aggregator_config = aggregator_config or AggregatorConfig.from_settings(self.settings)
        self.weekly = WeeklyAggregator(aggregator_config)
        self.monthly = MonthlyAggregator(aggregator_config, weekly=self.weekly)
        self.trend = OverallTrendAnalyzer(trend_config or TrendConfig.from_settings(self.settings))
        self.insights = InsightGenerator(
            insight_config or InsightConfig.from_settings(self.settings)
        )
        self.recommendations = RecommendationGenerator(
            recommendation_config or RecommendationConfig.from_settings(self.settings)
        )
        self.alerts = AlertEvaluator(alert_config or AlertConfig.from_settings(self.settings))

    def lookback_start(self) -> date:
        """Earliest date callers should request from their record store."""
        return months_before(self.clock.today(), self.settings.lookback_months)

    def analyze(self, records: Iterable[RecordInput]) -> AnalysisResult:
        """Analyze one athlete's workload history.

        Args:
            records: Supplier rows or WorkloadRecord objects in any order.

        Returns:
            AnalysisResult; empty buckets and onboarding advice when no
            ratio can be computed.

        Raises:
            DuplicateRecordError: Only when the duplicate policy is ``reject``
                and two records share a date.
        """
        daily = merge_daily_records(parse_records(records), self.settings.duplicate_policy)
        points = self.ratio_calculator.calculate(daily)

        weekly = self.weekly.aggregate(points)
        monthly = self.monthly.aggregate(points)
        overall = self.trend.analyze(weekly)
        insights = self.insights.generate(weekly, monthly)
        recommendations = self.recommendations.generate(weekly, monthly, insights)

        sufficient = len(points) >= self.settings.min_points_for_analysis
        now = self.clock.now()
        today = now.date()
        alerts = self.alerts.evaluate(points, daily, now)

        logger.info(
            "Workload analysis completed",
            records=len(daily),
            points=len(points),
            weeks=len(weekly),
            months=len(monthly),
            direction=overall.direction.value,
            sufficient_data=sufficient,
            alerts=[a.alert_type.value for a in alerts],
        )

        return AnalysisResult(
            weekly_buckets=weekly,
            monthly_buckets=monthly,
            overall_trend=overall,
            insights=insights,
            recommendations=recommendations,
            ratio_points=points,
            as_of=today,
            sufficient_data=sufficient,
            readiness=assess_readiness(daily, today),
            alerts=alerts,
        )


# =============================================================================
# Factory Functions
# =============================================================================


def create_workload_analyzer(
    clock: Clock | None = None,
    settings: Settings | None = None,
) -> WorkloadAnalyzer:
    """Create a workload analyzer with optional clock and settings.

    Args:
        clock: Optional civil clock.
        settings: Optional settings override.

    Returns:
        Configured WorkloadAnalyzer instance.
    """
    return WorkloadAnalyzer(clock=clock, settings=settings)


def analyze_workload(
    records: Iterable[RecordInput],
    clock: Clock | None = None,
) -> AnalysisResult:
    """Run a one-off analysis with default configuration."""
    return create_workload_analyzer(clock=clock).analyze(records)
