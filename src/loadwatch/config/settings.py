"""Application settings loaded from environment variables."""

from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DuplicatePolicy(str, Enum):
    """How records sharing a date are resolved before analysis."""

    SUM = "sum"
    REJECT = "reject"


class TrendThresholds(BaseModel):
    """Percentage thresholds used by trend classification and insights.

    All values are percentages; a change strictly above the threshold is
    classified as a direction, anything at or below it is stable.
    """

    weekly_percent: float = Field(default=5.0, ge=0.0, le=100.0)
    """Half-vs-half change that marks a week as increasing/decreasing."""

    monthly_percent: float = Field(default=10.0, ge=0.0, le=100.0)
    """Half-vs-half change that marks a month as increasing/decreasing."""

    overall_percent: float = Field(default=5.0, ge=0.0, le=100.0)
    """First-vs-last week change for the overall direction."""

    overall_lookback_weeks: int = Field(default=4, ge=2, le=52)
    """Number of most recent weekly buckets compared by the overall trend."""

    monthly_insight_percent: float = Field(default=15.0, ge=0.0, le=100.0)
    """Month-over-month change that produces a monthly insight."""


class RecommendationThresholds(BaseModel):
    """Cut-offs read by the recommendation rules against the latest week."""

    high_average_ratio: float = Field(default=1.5, gt=0.0, le=5.0)
    """Weekly average ratio above which intensity should come down."""

    low_average_ratio: float = Field(default=0.8, ge=0.0, le=5.0)
    """Weekly average ratio below which intensity should go up."""

    maintain_average_ratio: float = Field(default=1.3, gt=0.0, le=5.0)
    """Upper end of the range where the current load is kept."""

    max_risk_days: int = Field(default=3, ge=0, le=7)
    max_ratio_spread: float = Field(default=1.0, ge=0.0, le=10.0)

    min_active_days: int = Field(default=3, ge=0, le=7)
    """Fewer active days than this asks for more frequent training."""

    max_active_days: int = Field(default=6, ge=0, le=7)
    """More active days than this asks for a rest day."""

    rapid_trend_percent: float = Field(default=10.0, ge=0.0, le=100.0)


class AlertThresholds(BaseModel):
    """Thresholds for the alerts raised on the latest state of a history."""

    high_ratio: float = Field(default=1.5, gt=0.0, le=5.0)
    """Latest ratio strictly above this raises a high-risk alert."""

    caution_ratio: float = Field(default=1.3, gt=0.0, le=5.0)
    """Latest ratio strictly above this raises a caution alert."""

    low_ratio: float = Field(default=0.8, ge=0.0, le=5.0)
    """Latest ratio strictly below this raises a low-load alert."""

    min_days_for_ratio: int = Field(default=21, ge=0, le=365)
    """Distinct logged days needed before any ratio alert is raised."""

    no_data_days: int = Field(default=5, ge=1, le=365)
    """Days since the last record that raise a missing-data alert."""

    high_load: float = Field(default=600.0, gt=0.0)
    """Single-day load at or above which a high-load alert is raised."""

    spike_ratio: float = Field(default=1.6, gt=0.0, le=10.0)
    """Today's load over the recent average that counts as a spike."""

    reminder_enabled: bool = False
    reminder_hour: int = Field(default=22, ge=0, le=23)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ENVIRONMENT: Literal["development", "test", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Civil calendar
    utc_offset_hours: int = Field(default=9, ge=-12, le=14)

    # Intake
    lookback_months: int = Field(default=3, ge=1, le=24)
    min_points_for_analysis: int = Field(default=14, ge=0, le=365)
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.SUM

    # Trend configuration
    trend: TrendThresholds = TrendThresholds()

    # Rule tables
    recommendation: RecommendationThresholds = RecommendationThresholds()
    alert: AlertThresholds = AlertThresholds()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
