"""Tests for alert evaluation.

Tests cover:
- Ratio alerts and the logged-days gate
- Missing-data and reminder alerts
- Single-day load and load-spike alerts
- Timestamps, serialization, sorting and expiry
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from loadwatch.analytics.alerts import (
    ALERT_RULES,
    AlertConfig,
    AlertEvaluator,
    active_alerts,
    sort_alerts,
)
from loadwatch.analytics.models import Alert, AlertPriority, AlertType, WorkloadRecord
from loadwatch.config.settings import AlertThresholds, Settings
from factories import daily_records, ratio_point

JST = timezone(timedelta(hours=9))
NOW = datetime(2025, 4, 1, 18, 0, tzinfo=JST)
TODAY = NOW.date()


@pytest.fixture
def evaluator() -> AlertEvaluator:
    """Create evaluator with default thresholds."""
    return AlertEvaluator(AlertConfig.from_settings(Settings()))


def history_ending_today(loads: list[float]) -> list[WorkloadRecord]:
    return daily_records(TODAY - timedelta(days=len(loads) - 1), loads)


def types_of(alerts: list[Alert]) -> list[AlertType]:
    return [alert.alert_type for alert in alerts]


# =============================================================================
# Ratio alerts
# =============================================================================


class TestRatioAlerts:
    """Tests for the latest-ratio rules."""

    def test_high_ratio_raises_high_and_caution(self, evaluator: AlertEvaluator) -> None:
        """Test a ratio above 1.5 clears both ratio thresholds."""
        alerts = evaluator.evaluate(
            [ratio_point(TODAY, 1.6)], history_ending_today([100] * 21), NOW
        )

        assert types_of(alerts) == [AlertType.HIGH_RISK, AlertType.CAUTION]
        assert alerts[0].priority == AlertPriority.HIGH
        assert alerts[0].ratio == 1.6
        assert alerts[0].threshold_label == "above 1.5"
        assert alerts[1].priority == AlertPriority.MEDIUM

    @pytest.mark.parametrize(
        ("ratio", "expected"),
        [
            (1.5, [AlertType.CAUTION]),
            (1.31, [AlertType.CAUTION]),
            (1.3, []),
            (1.0, []),
            (0.8, []),
            (0.79, [AlertType.LOW_LOAD]),
        ],
    )
    def test_thresholds_are_exclusive(
        self, evaluator: AlertEvaluator, ratio: float, expected: list[AlertType]
    ) -> None:
        """Test a ratio on a threshold does not raise its alert."""
        alerts = evaluator.evaluate(
            [ratio_point(TODAY, ratio)], history_ending_today([100] * 28), NOW
        )

        assert types_of(alerts) == expected

    def test_low_load_priority(self, evaluator: AlertEvaluator) -> None:
        """Test low-load alerts are low priority and expire after three days."""
        alert = evaluator.evaluate(
            [ratio_point(TODAY, 0.5)], history_ending_today([100] * 28), NOW
        )[0]

        assert alert.priority == AlertPriority.LOW
        assert alert.threshold_label == "below 0.8"
        assert alert.expires_at == NOW + timedelta(hours=72)

    def test_silent_before_minimum_days(self, evaluator: AlertEvaluator) -> None:
        """Test 20 logged days are not enough for ratio alerts."""
        alerts = evaluator.evaluate(
            [ratio_point(TODAY, 2.0)], history_ending_today([100] * 20), NOW
        )

        assert alerts == []

    def test_no_points_no_ratio_alerts(self, evaluator: AlertEvaluator) -> None:
        """Test a history without ratio points raises no ratio alert."""
        assert evaluator.evaluate([], history_ending_today([0] * 30), NOW) == []

    def test_gate_follows_settings(self) -> None:
        """Test the logged-days gate is configurable."""
        settings = Settings(alert=AlertThresholds(min_days_for_ratio=1))
        evaluator = AlertEvaluator(AlertConfig.from_settings(settings))

        alerts = evaluator.evaluate([ratio_point(TODAY, 4.0)], history_ending_today([70]), NOW)

        assert types_of(alerts) == [AlertType.HIGH_RISK, AlertType.CAUTION]


# =============================================================================
# Logging gaps
# =============================================================================


class TestMissingDataAlerts:
    """Tests for the missing-data and reminder rules."""

    def test_five_days_without_records(self, evaluator: AlertEvaluator) -> None:
        """Test five days since the last record raises a missing-data alert."""
        daily = daily_records(date(2025, 3, 20), [100, 100, 100, 100, 100, 100, 100])

        alerts = evaluator.evaluate([], daily, NOW)

        assert types_of(alerts) == [AlertType.NO_DATA]
        assert alerts[0].last_record_date == date(2025, 3, 27)
        assert alerts[0].days_since_last_record == 5
        assert alerts[0].expires_at == NOW + timedelta(days=7)

    def test_four_days_tolerated(self, evaluator: AlertEvaluator) -> None:
        """Test four days without a record raise nothing."""
        daily = daily_records(date(2025, 3, 28), [100])

        assert evaluator.evaluate([], daily, NOW) == []

    def test_empty_history(self, evaluator: AlertEvaluator) -> None:
        """Test no records raise no missing-data alert."""
        assert evaluator.evaluate([], [], NOW) == []

    def test_reminder_disabled_by_default(self, evaluator: AlertEvaluator) -> None:
        """Test the reminder needs to be switched on."""
        late = NOW.replace(hour=23)
        daily = daily_records(TODAY - timedelta(days=1), [100])

        assert evaluator.evaluate([], daily, late) == []

    @pytest.mark.parametrize(
        ("hour", "logged_today", "expected"),
        [
            (22, False, [AlertType.REMINDER]),
            (23, False, [AlertType.REMINDER]),
            (21, False, []),
            (22, True, []),
        ],
    )
    def test_reminder(self, hour: int, logged_today: bool, expected: list[AlertType]) -> None:
        """Test the reminder fires late in a day without a record."""
        evaluator = AlertEvaluator(AlertConfig(reminder_enabled=True, reminder_hour=22))
        daily = history_ending_today([100, 100]) if logged_today else daily_records(
            TODAY - timedelta(days=1), [100]
        )

        alerts = evaluator.evaluate([], daily, NOW.replace(hour=hour))

        assert types_of(alerts) == expected

    def test_reminder_expires_in_two_hours(self) -> None:
        """Test the reminder has a short expiry."""
        evaluator = AlertEvaluator(AlertConfig(reminder_enabled=True))
        late = NOW.replace(hour=22, minute=30)

        alert = evaluator.evaluate([], daily_records(TODAY - timedelta(days=1), [100]), late)[0]

        assert alert.priority == AlertPriority.LOW
        assert alert.expires_at == late + timedelta(hours=2)


# =============================================================================
# Load alerts
# =============================================================================


class TestLoadAlerts:
    """Tests for the single-day load and spike rules."""

    @pytest.mark.parametrize(
        ("today_load", "raised"),
        [(600, True), (599.5, True), (599.4, False), (0, False)],
    )
    def test_high_load(self, evaluator: AlertEvaluator, today_load: float, raised: bool) -> None:
        """Test today's rounded load is compared with the high-load threshold."""
        daily = history_ending_today([500] * 7 + [today_load])

        alerts = evaluator.evaluate([], daily, NOW)

        assert (AlertType.HIGH_LOAD in types_of(alerts)) is raised

    def test_high_load_details(self, evaluator: AlertEvaluator) -> None:
        """Test the high-load alert carries today's load."""
        alert = evaluator.evaluate([], history_ending_today([650]), NOW)[0]

        assert alert.alert_type == AlertType.HIGH_LOAD
        assert alert.priority == AlertPriority.MEDIUM
        assert alert.load == 650.0

    def test_spike(self, evaluator: AlertEvaluator) -> None:
        """Test 1.6 times the recent average is a spike."""
        alerts = evaluator.evaluate([], history_ending_today([100] * 7 + [160]), NOW)

        assert types_of(alerts) == [AlertType.LOAD_SPIKE]
        assert alerts[0].priority == AlertPriority.HIGH
        assert alerts[0].load == 160.0
        assert alerts[0].average_load == 100.0
        assert alerts[0].spike_ratio == 1.6

    def test_below_spike(self, evaluator: AlertEvaluator) -> None:
        """Test 1.59 times the recent average is not a spike."""
        assert evaluator.evaluate([], history_ending_today([100] * 7 + [159]), NOW) == []

    def test_zero_days_excluded_from_average(self, evaluator: AlertEvaluator) -> None:
        """Test rest days do not dilute the recent average."""
        alerts = evaluator.evaluate(
            [], history_ending_today([0, 0, 100, 100, 100, 100, 100, 160]), NOW
        )

        assert alerts[0].average_load == 100.0

    def test_average_uses_last_seven_logged_days(self, evaluator: AlertEvaluator) -> None:
        """Test older records fall out of the recent average."""
        alerts = evaluator.evaluate([], history_ending_today([1000] + [100] * 7 + [200]), NOW)

        assert types_of(alerts) == [AlertType.LOAD_SPIKE]
        assert alerts[0].spike_ratio == 2.0

    def test_no_baseline(self, evaluator: AlertEvaluator) -> None:
        """Test a first-ever session cannot spike."""
        assert evaluator.evaluate([], history_ending_today([300]), NOW) == []

    def test_nothing_logged_today(self, evaluator: AlertEvaluator) -> None:
        """Test a missing today record raises no load alert."""
        daily = daily_records(TODAY - timedelta(days=3), [100, 100, 900])

        assert evaluator.evaluate([], daily, NOW) == []


# =============================================================================
# Output
# =============================================================================


class TestAlertOutput:
    """Tests for timestamps, serialization and ordering."""

    def test_timestamps(self, evaluator: AlertEvaluator) -> None:
        """Test alerts are stamped with the evaluation instant."""
        alerts = evaluator.evaluate(
            [ratio_point(TODAY, 1.7)], history_ending_today([100] * 21), NOW
        )

        assert {a.created_at for a in alerts} == {NOW}
        assert alerts[0].expires_at == NOW + timedelta(hours=48)

    def test_to_dict(self, evaluator: AlertEvaluator) -> None:
        """Test the serialized alert omits unset details."""
        alert = evaluator.evaluate([], history_ending_today([100] * 7 + [160]), NOW)[0]

        assert alert.to_dict() == {
            "type": "load_spike",
            "priority": "high",
            "title": "Load spike",
            "message": alert.message,
            "createdAt": "2025-04-01T18:00:00+09:00",
            "expiresAt": "2025-04-04T18:00:00+09:00",
            "load": 160.0,
            "averageLoad": 100.0,
            "spikeRatio": 1.6,
        }

    def test_sort_by_priority(self, evaluator: AlertEvaluator) -> None:
        """Test high priority alerts come first."""
        alerts = evaluator.evaluate(
            [ratio_point(TODAY, 1.7)], history_ending_today([100] * 20 + [160]), NOW
        )

        ordered = sort_alerts(alerts)

        assert [a.priority for a in ordered] == [
            AlertPriority.HIGH,
            AlertPriority.HIGH,
            AlertPriority.MEDIUM,
        ]
        assert ordered[-1].alert_type == AlertType.CAUTION

    def test_sort_newest_first_within_priority(self) -> None:
        """Test equal priorities are ordered newest first."""
        older = Alert(AlertType.CAUTION, AlertPriority.MEDIUM, "a", "a", NOW - timedelta(hours=1))
        newer = Alert(AlertType.NO_DATA, AlertPriority.MEDIUM, "b", "b", NOW)

        assert sort_alerts([older, newer]) == [newer, older]

    def test_active_alerts(self) -> None:
        """Test expired alerts are dropped."""
        expiring = Alert(
            AlertType.REMINDER, AlertPriority.LOW, "r", "r", NOW, NOW + timedelta(hours=2)
        )
        lasting = Alert(AlertType.NO_DATA, AlertPriority.MEDIUM, "n", "n", NOW)

        assert active_alerts([expiring, lasting], NOW + timedelta(hours=1)) == [expiring, lasting]
        assert active_alerts([expiring, lasting], NOW + timedelta(hours=3)) == [lasting]

    def test_rule_table_order(self) -> None:
        """Test the default table covers every alert type once."""
        assert [rule.alert_type for rule in ALERT_RULES] == list(AlertType)
