"""Configuration validation for startup checks.

Validates that the analytics configuration is coherent before a caller
starts feeding athlete data through the engine.

Usage:
    from loadwatch.config.validation import validate_or_raise

    # During startup
    validate_or_raise()
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from loadwatch.config.settings import DuplicatePolicy, Settings, get_settings
from loadwatch.utils.exceptions import ConfigurationError

logger = logging.getLogger("loadwatch.config")


class ValidationSeverity(str, Enum):
    """Severity of configuration validation issues."""

    ERROR = "error"  # Must be fixed before analysing
    WARNING = "warning"  # Analysis runs but results may mislead


@dataclass
class ValidationResult:
    """Result of a configuration validation check."""

    field: str
    severity: ValidationSeverity
    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        prefix = "ERROR" if self.severity == ValidationSeverity.ERROR else "WARNING"
        result = f"[{prefix}] {self.field}: {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result


def validate_configuration(settings: Settings | None = None) -> list[ValidationResult]:
    """Validate analytics configuration.

    Args:
        settings: Settings to validate (default: global settings)

    Returns:
        List of validation results (empty if all checks pass)
    """
    if settings is None:
        settings = get_settings()

    results: list[ValidationResult] = []
    results.extend(_validate_trend(settings))
    results.extend(_validate_intake(settings))
    results.extend(_validate_rule_thresholds(settings))
    results.extend(_validate_environment(settings))
    return results


def validate_or_raise(settings: Settings | None = None) -> None:
    """Validate configuration and raise if errors found.

    Args:
        settings: Settings to validate

    Raises:
        ConfigurationError: If any validation errors are found
    """
    results = validate_configuration(settings)
    errors = [r for r in results if r.severity == ValidationSeverity.ERROR]

    if errors:
        error_messages = "\n".join(str(e) for e in errors)
        raise ConfigurationError(f"Configuration validation failed:\n{error_messages}")

    for warning in (r for r in results if r.severity == ValidationSeverity.WARNING):
        logger.warning(str(warning))


# =============================================================================
# Validators
# =============================================================================


def _validate_trend(settings: Settings) -> list[ValidationResult]:
    """Validate trend thresholds."""
    results: list[ValidationResult] = []
    trend = settings.trend

    if trend.monthly_percent < trend.weekly_percent:
        results.append(
            ValidationResult(
                field="trend.monthly_percent",
                severity=ValidationSeverity.WARNING,
                message=(
                    f"Monthly threshold {trend.monthly_percent}% is below the weekly "
                    f"threshold {trend.weekly_percent}%"
                ),
                suggestion="Months average more days and should use the less sensitive threshold",
            )
        )

    if trend.weekly_percent == 0 or trend.overall_percent == 0:
        results.append(
            ValidationResult(
                field="trend",
                severity=ValidationSeverity.WARNING,
                message="A zero trend threshold classifies every change as a direction",
            )
        )

    return results


def _validate_intake(settings: Settings) -> list[ValidationResult]:
    """Validate intake settings."""
    results: list[ValidationResult] = []

    if settings.lookback_months < 2:
        results.append(
            ValidationResult(
                field="lookback_months",
                severity=ValidationSeverity.WARNING,
                message=f"Lookback of {settings.lookback_months} month(s) leaves few ratio points",
                suggestion="Use at least 2 months so chronic windows are populated",
            )
        )

    # Shortest possible lookback: every month counted as 28 days
    reachable_days = settings.lookback_months * 28
    if settings.min_points_for_analysis > reachable_days:
        results.append(
            ValidationResult(
                field="min_points_for_analysis",
                severity=ValidationSeverity.ERROR,
                message=(
                    f"{settings.min_points_for_analysis} points cannot be reached within "
                    f"a {settings.lookback_months}-month lookback"
                ),
                suggestion="Lower min_points_for_analysis or extend lookback_months",
            )
        )

    if settings.min_points_for_analysis < 7:
        results.append(
            ValidationResult(
                field="min_points_for_analysis",
                severity=ValidationSeverity.WARNING,
                message="Fewer than 7 points cannot fill a single weekly bucket",
            )
        )

    return results


def _validate_rule_thresholds(settings: Settings) -> list[ValidationResult]:
    """Validate recommendation and alert cut-offs."""
    results: list[ValidationResult] = []
    rec = settings.recommendation
    alert = settings.alert

    if not rec.low_average_ratio <= rec.maintain_average_ratio <= rec.high_average_ratio:
        results.append(
            ValidationResult(
                field="recommendation",
                severity=ValidationSeverity.ERROR,
                message=(
                    f"Average-ratio cut-offs must satisfy low ({rec.low_average_ratio}) <= "
                    f"maintain ({rec.maintain_average_ratio}) <= high ({rec.high_average_ratio})"
                ),
            )
        )

    if rec.min_active_days > rec.max_active_days:
        results.append(
            ValidationResult(
                field="recommendation.min_active_days",
                severity=ValidationSeverity.WARNING,
                message="Every week will be asked to train both more and less often",
                suggestion="Keep min_active_days at or below max_active_days",
            )
        )

    if not alert.low_ratio < alert.caution_ratio <= alert.high_ratio:
        results.append(
            ValidationResult(
                field="alert",
                severity=ValidationSeverity.ERROR,
                message=(
                    f"Ratio alert thresholds must satisfy low ({alert.low_ratio}) < "
                    f"caution ({alert.caution_ratio}) <= high ({alert.high_ratio})"
                ),
            )
        )

    if alert.min_days_for_ratio < 21:
        results.append(
            ValidationResult(
                field="alert.min_days_for_ratio",
                severity=ValidationSeverity.WARNING,
                message=(
                    f"Ratio alerts after {alert.min_days_for_ratio} days rely on a "
                    "partly empty chronic window"
                ),
                suggestion="Use at least 21 days",
            )
        )

    return results


def _validate_environment(settings: Settings) -> list[ValidationResult]:
    """Validate environment-specific settings."""
    results: list[ValidationResult] = []

    if settings.ENVIRONMENT == "production" and settings.log_level == "DEBUG":
        results.append(
            ValidationResult(
                field="log_level",
                severity=ValidationSeverity.WARNING,
                message="DEBUG log level in production logs every skipped record",
                suggestion="Use INFO or WARNING for production",
            )
        )

    if settings.ENVIRONMENT == "production" and settings.duplicate_policy == DuplicatePolicy.REJECT:
        results.append(
            ValidationResult(
                field="duplicate_policy",
                severity=ValidationSeverity.WARNING,
                message="'reject' aborts analysis on the first duplicated date",
                suggestion="Use 'sum' in production and de-duplicate in the record supplier",
            )
        )

    return results


def get_configuration_summary(settings: Settings | None = None) -> dict[str, Any]:
    """Get a summary of current configuration (safe for logging).

    Args:
        settings: Settings to summarize

    Returns:
        Dictionary with configuration summary
    """
    if settings is None:
        settings = get_settings()

    return {
        "environment": settings.ENVIRONMENT,
        "log_level": settings.log_level,
        "utc_offset_hours": settings.utc_offset_hours,
        "lookback_months": settings.lookback_months,
        "min_points_for_analysis": settings.min_points_for_analysis,
        "duplicate_policy": settings.duplicate_policy.value,
        "trend": settings.trend.model_dump(),
        "recommendation": settings.recommendation.model_dump(),
        "alert": settings.alert.model_dump(),
    }
