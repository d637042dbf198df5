"""Alerts on the current state of an athlete's history.

Alerts look at the latest ratio point and at the daily loads around
"today" on the injected clock. Every matching rule in ``ALERT_RULES``
raises one alert, stamped with the evaluation instant and an expiry.

Ratio alerts stay silent until enough distinct days are logged for the
chronic window to mean something. Load alerts read the merged daily load,
so a day logged as session RPE times duration counts the same as an
explicit load.

Usage:
    from loadwatch.analytics.alerts import AlertEvaluator

    alerts = AlertEvaluator().evaluate(points, daily, clock.now())
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field

from loadwatch.analytics.models import (
    Alert,
    AlertPriority,
    AlertType,
    RatioPoint,
    WorkloadRecord,
)
from loadwatch.config.settings import Settings, get_settings
from loadwatch.core.logging import get_logger
from loadwatch.utils.rounding import round_half_up

logger = get_logger(__name__)

SPIKE_BASELINE_DAYS = 7


class AlertConfig(BaseModel):
    """Configuration for alert evaluation."""

    high_ratio: float = Field(
        default_factory=lambda: get_settings().alert.high_ratio,
        gt=0.0,
        le=5.0,
        description="Latest ratio above which a high-risk alert is raised",
    )
    caution_ratio: float = Field(
        default_factory=lambda: get_settings().alert.caution_ratio,
        gt=0.0,
        le=5.0,
        description="Latest ratio above which a caution alert is raised",
    )
    low_ratio: float = Field(
        default_factory=lambda: get_settings().alert.low_ratio,
        ge=0.0,
        le=5.0,
        description="Latest ratio below which a low-load alert is raised",
    )
    min_days_for_ratio: int = Field(
        default_factory=lambda: get_settings().alert.min_days_for_ratio,
        ge=0,
        le=365,
        description="Distinct logged days required for ratio alerts",
    )
    no_data_days: int = Field(
        default_factory=lambda: get_settings().alert.no_data_days,
        ge=1,
        le=365,
        description="Days without a record that raise a missing-data alert",
    )
    high_load: float = Field(
        default_factory=lambda: get_settings().alert.high_load,
        gt=0.0,
        description="Single-day load that raises a high-load alert",
    )
    spike_ratio: float = Field(
        default_factory=lambda: get_settings().alert.spike_ratio,
        gt=0.0,
        le=10.0,
        description="Today's load over the recent average that counts as a spike",
    )
    reminder_enabled: bool = Field(
        default_factory=lambda: get_settings().alert.reminder_enabled,
        description="Raise a reminder late in a day with no record",
    )
    reminder_hour: int = Field(
        default_factory=lambda: get_settings().alert.reminder_hour,
        ge=0,
        le=23,
        description="Local hour from which the reminder is raised",
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AlertConfig":
        """Build from application settings."""
        return cls(**settings.alert.model_dump())


@dataclass(frozen=True)
class AlertContext:
    """Inputs visible to every alert rule."""

    points: Sequence[RatioPoint]
    daily: Sequence[WorkloadRecord]
    now: datetime

    @property
    def today(self) -> date:
        return self.now.date()

    @property
    def latest(self) -> RatioPoint | None:
        return self.points[-1] if self.points else None

    @property
    def days_with_data(self) -> int:
        return len({record.date for record in self.daily})

    @property
    def last_record(self) -> WorkloadRecord | None:
        return self.daily[-1] if self.daily else None

    @property
    def has_record_today(self) -> bool:
        return any(record.date == self.today for record in self.daily)

    @property
    def today_load(self) -> float:
        """Today's load to the nearest whole unit."""
        total = sum(record.load for record in self.daily if record.date == self.today)
        return round_half_up(total, 0)

    @property
    def recent_average_load(self) -> float:
        """Mean of the non-zero loads on the last logged days before today."""
        before = [record for record in self.daily if record.date < self.today]
        loads = [record.load for record in before[-SPIKE_BASELINE_DAYS:] if record.load > 0]
        if not loads:
            return 0.0
        return round_half_up(sum(loads) / len(loads), 0)

    @property
    def spike_ratio(self) -> float:
        average = self.recent_average_load
        if average <= 0:
            return 0.0
        return round_half_up(self.today_load / average, 2)

    def has_ratio_history(self, cfg: AlertConfig) -> bool:
        return self.latest is not None and self.days_with_data >= cfg.min_days_for_ratio


@dataclass(frozen=True)
class AlertRule:
    """One entry of the alert table.

    ``describe`` returns the title, message and detail fields of the alert;
    the evaluator adds the type, priority and timestamps.
    """

    name: str
    alert_type: AlertType
    priority: AlertPriority
    expires_after: timedelta
    applies: Callable[[AlertContext, AlertConfig], bool]
    describe: Callable[[AlertContext, AlertConfig], dict[str, Any]]


def _ratio_above(ctx: AlertContext, threshold: float, title: str) -> dict[str, Any]:
    ratio = ctx.latest.ratio
    return {
        "title": title,
        "message": (
            f"The latest ratio is {ratio}, above {threshold}. The risk of injury is elevated."
        ),
        "ratio": ratio,
        "threshold_label": f"above {threshold}",
    }


def _high_risk(ctx: AlertContext, cfg: AlertConfig) -> dict[str, Any]:
    return _ratio_above(ctx, cfg.high_ratio, "High injury risk")


def _caution(ctx: AlertContext, cfg: AlertConfig) -> dict[str, Any]:
    return _ratio_above(ctx, cfg.caution_ratio, "Caution")


def _low_load(ctx: AlertContext, cfg: AlertConfig) -> dict[str, Any]:
    ratio = ctx.latest.ratio
    return {
        "title": "Low training load",
        "message": (
            f"The latest ratio is {ratio}, below {cfg.low_ratio}. "
            "Training load may be too low to maintain fitness."
        ),
        "ratio": ratio,
        "threshold_label": f"below {cfg.low_ratio}",
    }


def _days_since_last_record(ctx: AlertContext) -> int | None:
    last = ctx.last_record
    return (ctx.today - last.date).days if last else None


def _no_data(ctx: AlertContext, cfg: AlertConfig) -> dict[str, Any]:
    days = _days_since_last_record(ctx)
    return {
        "title": "No training logged",
        "message": f"No training has been logged for {days} days. Keep recording every session.",
        "last_record_date": ctx.last_record.date,
        "days_since_last_record": days,
    }


def _reminder(ctx: AlertContext, cfg: AlertConfig) -> dict[str, Any]:
    return {
        "title": "Log today's training",
        "message": "Today's training has not been logged yet.",
    }


def _high_load(ctx: AlertContext, cfg: AlertConfig) -> dict[str, Any]:
    load = ctx.today_load
    return {
        "title": "High training load",
        "message": (
            f"Today's load is {load:.0f}. Fatigue builds quickly: "
            "prioritize sleep, nutrition and recovery."
        ),
        "load": load,
    }


def _load_spike(ctx: AlertContext, cfg: AlertConfig) -> dict[str, Any]:
    load, average, spike = ctx.today_load, ctx.recent_average_load, ctx.spike_ratio
    return {
        "title": "Load spike",
        "message": (
            f"Today's load jumped to {load:.0f} against a recent average of {average:.0f} "
            f"({spike}x). Sudden increases raise the risk of injury."
        ),
        "load": load,
        "average_load": average,
        "spike_ratio": spike,
    }


ALERT_RULES: tuple[AlertRule, ...] = (
    # Both ratio-above rules fire when the ratio clears the high threshold
    AlertRule(
        name="high_risk",
        alert_type=AlertType.HIGH_RISK,
        priority=AlertPriority.HIGH,
        expires_after=timedelta(hours=48),
        applies=lambda ctx, cfg: ctx.has_ratio_history(cfg) and ctx.latest.ratio > cfg.high_ratio,
        describe=_high_risk,
    ),
    AlertRule(
        name="caution",
        alert_type=AlertType.CAUTION,
        priority=AlertPriority.MEDIUM,
        expires_after=timedelta(hours=48),
        applies=lambda ctx, cfg: (
            ctx.has_ratio_history(cfg) and ctx.latest.ratio > cfg.caution_ratio
        ),
        describe=_caution,
    ),
    AlertRule(
        name="low_load",
        alert_type=AlertType.LOW_LOAD,
        priority=AlertPriority.LOW,
        expires_after=timedelta(hours=72),
        applies=lambda ctx, cfg: ctx.has_ratio_history(cfg) and ctx.latest.ratio < cfg.low_ratio,
        describe=_low_load,
    ),
    AlertRule(
        name="no_data",
        alert_type=AlertType.NO_DATA,
        priority=AlertPriority.MEDIUM,
        expires_after=timedelta(days=7),
        applies=lambda ctx, cfg: (_days_since_last_record(ctx) or 0) >= cfg.no_data_days,
        describe=_no_data,
    ),
    AlertRule(
        name="reminder",
        alert_type=AlertType.REMINDER,
        priority=AlertPriority.LOW,
        expires_after=timedelta(hours=2),
        applies=lambda ctx, cfg: (
            cfg.reminder_enabled
            and ctx.now.hour >= cfg.reminder_hour
            and not ctx.has_record_today
        ),
        describe=_reminder,
    ),
    AlertRule(
        name="high_load",
        alert_type=AlertType.HIGH_LOAD,
        priority=AlertPriority.MEDIUM,
        expires_after=timedelta(hours=48),
        applies=lambda ctx, cfg: ctx.today_load > 0 and ctx.today_load >= cfg.high_load,
        describe=_high_load,
    ),
    AlertRule(
        name="load_spike",
        alert_type=AlertType.LOAD_SPIKE,
        priority=AlertPriority.HIGH,
        expires_after=timedelta(hours=72),
        applies=lambda ctx, cfg: (
            ctx.today_load > 0
            and ctx.recent_average_load > 0
            and ctx.spike_ratio >= cfg.spike_ratio
        ),
        describe=_load_spike,
    ),
)


class AlertEvaluator:
    """Evaluates the alert table at one instant.

    Example:
        evaluator = AlertEvaluator(AlertConfig.from_settings(settings))
        alerts = evaluator.evaluate(points, daily, clock.now())
    """

    def __init__(
        self,
        config: AlertConfig | None = None,
        rules: Sequence[AlertRule] = ALERT_RULES,
    ) -> None:
        self.config = config or AlertConfig()
        self.rules = tuple(rules)

    def evaluate(
        self,
        points: Sequence[RatioPoint],
        daily: Sequence[WorkloadRecord],
        now: datetime,
    ) -> list[Alert]:
        """Raise the alerts that hold at ``now``.

        Args:
            points: Ratio points ascending by date.
            daily: Merged daily records ascending by date.
            now: Evaluation instant in the civil offset; its date is "today".

        Returns:
            Alerts in rule order.
        """
        ctx = AlertContext(points=points, daily=daily, now=now)
        alerts = [
            Alert(
                alert_type=rule.alert_type,
                priority=rule.priority,
                created_at=now,
                expires_at=now + rule.expires_after,
                **rule.describe(ctx, self.config),
            )
            for rule in self.rules
            if rule.applies(ctx, self.config)
        ]
        logger.debug("Alerts evaluated", types=[a.alert_type.value for a in alerts])
        return alerts


def active_alerts(alerts: Sequence[Alert], now: datetime) -> list[Alert]:
    """Drop alerts that have expired by ``now``."""
    return [alert for alert in alerts if not alert.is_expired(now)]


def sort_alerts(alerts: Sequence[Alert]) -> list[Alert]:
    """Order alerts by priority, then newest first."""
    return sorted(alerts, key=lambda a: (a.priority.rank, a.created_at), reverse=True)
