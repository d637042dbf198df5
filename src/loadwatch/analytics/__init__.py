"""Workload-ratio analytics: ratios, buckets, trends, insights, advice and alerts."""

from loadwatch.analytics.aggregation import (
    AggregatorConfig,
    MonthlyAggregator,
    WeeklyAggregator,
    half_split_trend,
    summarize_points,
)
from loadwatch.analytics.alerts import (
    ALERT_RULES,
    AlertConfig,
    AlertEvaluator,
    AlertRule,
    active_alerts,
    sort_alerts,
)
from loadwatch.analytics.engine import (
    WorkloadAnalyzer,
    analyze_workload,
    create_workload_analyzer,
)
from loadwatch.analytics.insights import (
    INSIGHT_RULES,
    InsightConfig,
    InsightGenerator,
    InsightRule,
)
from loadwatch.analytics.models import (
    Alert,
    AlertPriority,
    AlertType,
    AnalysisResult,
    BucketStats,
    DataReadiness,
    FeedbackKind,
    Insight,
    InsightCategory,
    MonthlyBucket,
    OverallTrend,
    ProgressFeedback,
    RatioPoint,
    RiskLevel,
    TrendDirection,
    WeeklyBucket,
    WorkloadRecord,
)
from loadwatch.analytics.ratio import (
    ACUTE_WINDOW_DAYS,
    CHRONIC_WINDOW_DAYS,
    RatioCalculator,
    classify_risk,
)
from loadwatch.analytics.readiness import (
    MINIMUM_DAYS,
    RECOMMENDED_DAYS,
    assess_readiness,
    entry_feedback,
    weekly_progress,
)
from loadwatch.analytics.recommendations import (
    CLOSING_RECOMMENDATIONS,
    ONBOARDING_RECOMMENDATIONS,
    RECOMMENDATION_RULES,
    RecommendationConfig,
    RecommendationGenerator,
    RecommendationRule,
)
from loadwatch.analytics.records import merge_daily_records, normalize_record, parse_records
from loadwatch.analytics.rules import RuleContext
from loadwatch.analytics.trends import OverallTrendAnalyzer, TrendConfig

__all__ = [
    # Engine
    "WorkloadAnalyzer",
    "create_workload_analyzer",
    "analyze_workload",
    # Models
    "Alert",
    "AlertPriority",
    "AlertType",
    "AnalysisResult",
    "BucketStats",
    "DataReadiness",
    "FeedbackKind",
    "Insight",
    "InsightCategory",
    "MonthlyBucket",
    "OverallTrend",
    "ProgressFeedback",
    "RatioPoint",
    "RiskLevel",
    "TrendDirection",
    "WeeklyBucket",
    "WorkloadRecord",
    # Records
    "parse_records",
    "normalize_record",
    "merge_daily_records",
    # Ratio
    "RatioCalculator",
    "classify_risk",
    "ACUTE_WINDOW_DAYS",
    "CHRONIC_WINDOW_DAYS",
    # Aggregation
    "WeeklyAggregator",
    "MonthlyAggregator",
    "AggregatorConfig",
    "half_split_trend",
    "summarize_points",
    # Trends
    "OverallTrendAnalyzer",
    "TrendConfig",
    # Rules
    "RuleContext",
    "InsightGenerator",
    "InsightConfig",
    "InsightRule",
    "INSIGHT_RULES",
    "RecommendationGenerator",
    "RecommendationConfig",
    "RecommendationRule",
    "RECOMMENDATION_RULES",
    "ONBOARDING_RECOMMENDATIONS",
    "CLOSING_RECOMMENDATIONS",
    # Alerts
    "AlertEvaluator",
    "AlertConfig",
    "AlertRule",
    "ALERT_RULES",
    "active_alerts",
    "sort_alerts",
    # Readiness
    "assess_readiness",
    "entry_feedback",
    "weekly_progress",
    "MINIMUM_DAYS",
    "RECOMMENDED_DAYS",
]
