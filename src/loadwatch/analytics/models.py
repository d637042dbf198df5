"""Data models for workload-ratio analytics.

Everything here is produced once and never mutated by the engine. The
``to_dict`` views use the camelCase field names consumed by the
presentation layer.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any


# =============================================================================
# Enums
# =============================================================================


class RiskLevel(str, Enum):
    """Injury-risk band of a workload ratio."""

    LOW = "low"
    GOOD = "good"
    CAUTION = "caution"
    HIGH = "high"


class TrendDirection(str, Enum):
    """Direction of a ratio trend."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class InsightCategory(str, Enum):
    """Tone of an insight."""

    WARNING = "warning"
    POSITIVE = "positive"
    NEUTRAL = "neutral"


# =============================================================================
# Data Models
# =============================================================================


@dataclass(frozen=True)
class WorkloadRecord:
    """One day of training load for an athlete."""

    date: date
    load: float


@dataclass(frozen=True)
class RatioPoint:
    """Acute:chronic workload ratio for a single training date."""

    date: date
    ratio: float
    acute_load: float
    chronic_load: float
    risk_level: RiskLevel

    @property
    def is_risky(self) -> bool:
        """True for caution and high days."""
        return self.risk_level in (RiskLevel.HIGH, RiskLevel.CAUTION)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "date": self.date.isoformat(),
            "ratio": self.ratio,
            "acuteLoad": self.acute_load,
            "chronicLoad": self.chronic_load,
            "riskLevel": self.risk_level.value,
        }


@dataclass(frozen=True)
class BucketStats:
    """Statistics shared by weekly and monthly buckets."""

    average_ratio: float
    max_ratio: float
    min_ratio: float
    total_load: float
    active_days: int
    risk_days: int
    trend_direction: TrendDirection = TrendDirection.STABLE
    trend_percent: float = 0.0

    @property
    def ratio_spread(self) -> float:
        """Max minus min ratio."""
        return self.max_ratio - self.min_ratio

    def stats_dict(self) -> dict[str, Any]:
        return {
            "averageRatio": self.average_ratio,
            "maxRatio": self.max_ratio,
            "minRatio": self.min_ratio,
            "totalLoad": self.total_load,
            "activeDays": self.active_days,
            "riskDays": self.risk_days,
            "trendDirection": self.trend_direction.value,
            "trendPercent": self.trend_percent,
        }


@dataclass(frozen=True)
class WeeklyBucket(BucketStats):
    """Ratio statistics for one Monday-to-Sunday week."""

    year: int = 0
    week_number: int = 0
    start_date: date | None = None
    end_date: date | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "year": self.year,
            "weekNumber": self.week_number,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            **self.stats_dict(),
        }


@dataclass(frozen=True)
class MonthlyBucket(BucketStats):
    """Ratio statistics for one calendar month."""

    year: int = 0
    month: int = 0
    month_label: str = ""
    weekly_breakdown: tuple[WeeklyBucket, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "year": self.year,
            "month": self.month,
            "monthLabel": self.month_label,
            **self.stats_dict(),
            "weeklyBreakdown": [w.to_dict() for w in self.weekly_breakdown],
        }


@dataclass(frozen=True)
class OverallTrend:
    """Direction of the average ratio across the most recent weeks."""

    direction: TrendDirection = TrendDirection.STABLE
    percent: float = 0.0
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "direction": self.direction.value,
            "percent": self.percent,
            "description": self.description,
        }


@dataclass(frozen=True)
class Insight:
    """A categorized observation about recent training."""

    category: InsightCategory
    title: str
    description: str
    value: float | None = None
    comparison_label: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {
            "category": self.category.value,
            "title": self.title,
            "description": self.description,
        }
        if self.value is not None:
            result["value"] = self.value
        if self.comparison_label is not None:
            result["comparisonLabel"] = self.comparison_label
        return result


@dataclass(frozen=True)
class DataReadiness:
    """How far an athlete's logging history is from a usable ratio."""

    days_with_data: int = 0
    consecutive_days: int = 0
    days_remaining: int = 0
    is_minimum_reached: bool = False
    is_recommended_reached: bool = False
    days_since_last_record: int | None = None
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "daysWithData": self.days_with_data,
            "consecutiveDays": self.consecutive_days,
            "daysRemaining": self.days_remaining,
            "isMinimumReached": self.is_minimum_reached,
            "isRecommendedReached": self.is_recommended_reached,
            "daysSinceLastRecord": self.days_since_last_record,
            "message": self.message,
        }


class FeedbackKind(str, Enum):
    """Kind of logging-progress feedback."""

    MILESTONE = "milestone"
    SUCCESS = "success"
    ENCOURAGEMENT = "encouragement"


@dataclass(frozen=True)
class ProgressFeedback:
    """Message shown after a record is logged."""

    title: str
    message: str
    kind: FeedbackKind
    celebrate: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "message": self.message,
            "kind": self.kind.value,
            "celebrate": self.celebrate,
        }


class AlertType(str, Enum):
    """Condition that raised an alert."""

    HIGH_RISK = "high_risk"
    CAUTION = "caution"
    LOW_LOAD = "low_load"
    NO_DATA = "no_data"
    REMINDER = "reminder"
    HIGH_LOAD = "high_load"
    LOAD_SPIKE = "load_spike"


class AlertPriority(str, Enum):
    """Urgency of an alert."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


@dataclass(frozen=True)
class Alert:
    """A time-limited notice about the current state of a history.

    Only the detail fields relevant to the alert type are set.
    """

    alert_type: AlertType
    priority: AlertPriority
    title: str
    message: str
    created_at: datetime
    expires_at: datetime | None = None

    # Ratio alerts
    ratio: float | None = None
    threshold_label: str | None = None

    # Missing-data alerts
    last_record_date: date | None = None
    days_since_last_record: int | None = None

    # Load alerts
    load: float | None = None
    average_load: float | None = None
    spike_ratio: float | None = None

    def is_expired(self, now: datetime) -> bool:
        """Check whether the alert has passed its expiry instant."""
        return self.expires_at is not None and now > self.expires_at

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {
            "type": self.alert_type.value,
            "priority": self.priority.value,
            "title": self.title,
            "message": self.message,
            "createdAt": self.created_at.isoformat(),
            "expiresAt": self.expires_at.isoformat() if self.expires_at else None,
        }
        details = {
            "ratio": self.ratio,
            "thresholdExceeded": self.threshold_label,
            "lastRecordDate": self.last_record_date.isoformat() if self.last_record_date else None,
            "daysSinceLastRecord": self.days_since_last_record,
            "load": self.load,
            "averageLoad": self.average_load,
            "spikeRatio": self.spike_ratio,
        }
        result.update({key: value for key, value in details.items() if value is not None})
        return result


@dataclass
class AnalysisResult:
    """Complete output of one engine run."""

    weekly_buckets: list[WeeklyBucket] = field(default_factory=list)
    monthly_buckets: list[MonthlyBucket] = field(default_factory=list)
    overall_trend: OverallTrend = field(default_factory=OverallTrend)
    insights: list[Insight] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    # Run context
    ratio_points: list[RatioPoint] = field(default_factory=list)
    as_of: date | None = None
    sufficient_data: bool = False
    readiness: DataReadiness | None = None
    alerts: list[Alert] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "weeklyBuckets": [w.to_dict() for w in self.weekly_buckets],
            "monthlyBuckets": [m.to_dict() for m in self.monthly_buckets],
            "overallTrend": self.overall_trend.to_dict(),
            "insights": [i.to_dict() for i in self.insights],
            "recommendations": list(self.recommendations),
            "ratioPoints": [p.to_dict() for p in self.ratio_points],
            "asOf": self.as_of.isoformat() if self.as_of else None,
            "sufficientData": self.sufficient_data,
            "readiness": self.readiness.to_dict() if self.readiness else None,
            "alerts": [a.to_dict() for a in self.alerts],
        }
