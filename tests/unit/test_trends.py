"""Tests for the overall trend analyzer."""

import pytest

from loadwatch.analytics.models import TrendDirection
from loadwatch.analytics.trends import (
    INSUFFICIENT_DATA_DESCRIPTION,
    TREND_DESCRIPTIONS,
    OverallTrendAnalyzer,
    TrendConfig,
)
from loadwatch.config.settings import Settings, TrendThresholds
from factories import weekly_series


@pytest.fixture
def analyzer() -> OverallTrendAnalyzer:
    """Create analyzer with default settings."""
    return OverallTrendAnalyzer(TrendConfig(lookback_weeks=4, threshold_percent=5.0))


class TestOverallTrendAnalyzer:
    """Tests for OverallTrendAnalyzer."""

    @pytest.mark.parametrize("averages", [[], [1.2]])
    def test_insufficient_weeks(self, analyzer: OverallTrendAnalyzer, averages) -> None:
        """Test fewer than two weeks gives a stable placeholder."""
        trend = analyzer.analyze(weekly_series(averages))

        assert trend.direction == TrendDirection.STABLE
        assert trend.percent == 0.0
        assert trend.description == INSUFFICIENT_DATA_DESCRIPTION

    def test_increasing_uses_last_four_weeks(self, analyzer: OverallTrendAnalyzer) -> None:
        """Test the first compared week is four from the end."""
        trend = analyzer.analyze(weekly_series([0.5, 1.1, 1.2, 1.3, 1.5]))

        assert trend.direction == TrendDirection.INCREASING
        assert trend.percent == 36.4
        assert trend.description == (
            "The workload ratio has risen 36.4% over the last 4 weeks. "
            "Keep a close eye on load management."
        )

    def test_decreasing(self, analyzer: OverallTrendAnalyzer) -> None:
        """Test two falling weeks."""
        trend = analyzer.analyze(weekly_series([1.2, 0.9]))

        assert trend.direction == TrendDirection.DECREASING
        assert trend.percent == 25.0
        assert "fallen 25.0%" in trend.description

    def test_stable_within_threshold(self, analyzer: OverallTrendAnalyzer) -> None:
        """Test a small change is stable."""
        trend = analyzer.analyze(weekly_series([1.0, 1.2, 0.8, 1.04]))

        assert trend.direction == TrendDirection.STABLE
        assert trend.percent == 4.0
        assert trend.description == TREND_DESCRIPTIONS[TrendDirection.STABLE]

    def test_threshold_is_exclusive(self) -> None:
        """Test a change equal to the threshold is stable."""
        analyzer = OverallTrendAnalyzer(TrendConfig(lookback_weeks=4, threshold_percent=25.0))
        trend = analyzer.analyze(weekly_series([1.0, 1.25]))

        assert trend.direction == TrendDirection.STABLE
        assert trend.percent == 25.0

    def test_middle_weeks_ignored(self, analyzer: OverallTrendAnalyzer) -> None:
        """Test only the first and last weeks of the window matter."""
        trend = analyzer.analyze(weekly_series([1.0, 3.0, 0.2, 1.0]))

        assert trend.direction == TrendDirection.STABLE
        assert trend.percent == 0.0

    def test_custom_lookback(self) -> None:
        """Test a two-week lookback compares only the last pair."""
        analyzer = OverallTrendAnalyzer(TrendConfig(lookback_weeks=2, threshold_percent=5.0))
        trend = analyzer.analyze(weekly_series([0.5, 1.0, 1.0]))

        assert trend.direction == TrendDirection.STABLE
        assert trend.percent == 0.0

    def test_to_dict(self, analyzer: OverallTrendAnalyzer) -> None:
        """Test serialization."""
        data = analyzer.analyze(weekly_series([1.2, 0.9])).to_dict()

        assert data["direction"] == "decreasing"
        assert data["percent"] == 25.0


class TestTrendConfig:
    """Tests for TrendConfig."""

    def test_from_settings(self) -> None:
        """Test values come from the trend thresholds."""
        settings = Settings(trend=TrendThresholds(overall_lookback_weeks=6, overall_percent=8.0))
        config = TrendConfig.from_settings(settings)

        assert config.lookback_weeks == 6
        assert config.threshold_percent == 8.0

    def test_rejects_short_lookback(self) -> None:
        """Test a lookback below two weeks is invalid."""
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            TrendConfig(lookback_weeks=1, threshold_percent=5.0)
