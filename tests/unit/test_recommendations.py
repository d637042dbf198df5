"""Tests for recommendation generation."""

import pytest

from loadwatch.analytics.models import TrendDirection
from loadwatch.analytics.recommendations import (
    CLOSING_RECOMMENDATIONS,
    ONBOARDING_RECOMMENDATIONS,
    RECOMMENDATION_RULES,
    RecommendationConfig,
    RecommendationGenerator,
    RecommendationRule,
)
from loadwatch.config.settings import RecommendationThresholds, Settings
from factories import weekly_bucket

RULES = {rule.name: rule for rule in RECOMMENDATION_RULES}


def messages_of(*names: str) -> list[str]:
    return [message for name in names for message in RULES[name].messages]


@pytest.fixture
def generator() -> RecommendationGenerator:
    """Create generator with the default rule table."""
    return RecommendationGenerator()


class TestRecommendationGenerator:
    """Tests for RecommendationGenerator."""

    def test_onboarding_without_history(self, generator: RecommendationGenerator) -> None:
        """Test empty history returns the onboarding advice only."""
        assert generator.generate([], []) == list(ONBOARDING_RECOMMENDATIONS)

    def test_high_average(self, generator: RecommendationGenerator) -> None:
        """Test an average above 1.5 asks to reduce intensity."""
        result = generator.generate([weekly_bucket(average_ratio=1.6, active_days=5)], [])

        assert result == messages_of("reduce_intensity") + list(CLOSING_RECOMMENDATIONS)

    def test_low_average(self, generator: RecommendationGenerator) -> None:
        """Test an average below 0.8 asks to increase intensity."""
        result = generator.generate([weekly_bucket(average_ratio=0.7, active_days=5)], [])

        assert result == messages_of("increase_intensity") + list(CLOSING_RECOMMENDATIONS)

    @pytest.mark.parametrize("average", [0.8, 1.0, 1.3])
    def test_optimal_average(self, generator: RecommendationGenerator, average: float) -> None:
        """Test the inclusive optimal band maintains load."""
        result = generator.generate([weekly_bucket(average_ratio=average, active_days=5)], [])

        assert result == messages_of("maintain_load") + list(CLOSING_RECOMMENDATIONS)

    @pytest.mark.parametrize("average", [1.4, 1.5])
    def test_caution_gap(self, generator: RecommendationGenerator, average: float) -> None:
        """Test averages in (1.3, 1.5] get no intensity advice."""
        result = generator.generate([weekly_bucket(average_ratio=average, active_days=5)], [])

        assert result == list(CLOSING_RECOMMENDATIONS)

    def test_many_risk_days(self, generator: RecommendationGenerator) -> None:
        """Test more than three risk days asks for a plan review."""
        result = generator.generate([weekly_bucket(risk_days=4, active_days=5)], [])

        assert result == messages_of("maintain_load", "review_plan") + list(
            CLOSING_RECOMMENDATIONS
        )

    def test_low_frequency(self, generator: RecommendationGenerator) -> None:
        """Test fewer than three active days asks for more sessions."""
        result = generator.generate([weekly_bucket(active_days=2)], [])

        assert messages_of("increase_frequency")[0] in result

    def test_every_day_active(self, generator: RecommendationGenerator) -> None:
        """Test seven active days asks for rest."""
        result = generator.generate([weekly_bucket(active_days=7)], [])

        assert result == messages_of("maintain_load", "rest_day") + list(CLOSING_RECOMMENDATIONS)

    def test_six_active_days_no_rest_advice(self, generator: RecommendationGenerator) -> None:
        """Test the rest-day threshold is exclusive."""
        result = generator.generate([weekly_bucket(active_days=6)], [])

        assert messages_of("rest_day")[0] not in result

    def test_rapid_increase(self, generator: RecommendationGenerator) -> None:
        """Test a weekly rise above 10% warns against jumps."""
        week = weekly_bucket(
            active_days=5, trend_direction=TrendDirection.INCREASING, trend_percent=12.0
        )
        result = generator.generate([week], [])

        assert messages_of("avoid_rapid_increase")[0] in result

    def test_rise_of_ten_percent_tolerated(self, generator: RecommendationGenerator) -> None:
        """Test the rapid-increase threshold is exclusive."""
        week = weekly_bucket(
            active_days=5, trend_direction=TrendDirection.INCREASING, trend_percent=10.0
        )
        result = generator.generate([week], [])

        assert messages_of("avoid_rapid_increase")[0] not in result

    def test_wide_spread(self, generator: RecommendationGenerator) -> None:
        """Test a spread above 1.0 asks for consistency."""
        week = weekly_bucket(active_days=5, max_ratio=2.2, min_ratio=0.6)
        result = generator.generate([week], [])

        assert result[-3] == messages_of("consistent_intensity")[0]

    def test_closing_always_last(self, generator: RecommendationGenerator) -> None:
        """Test the closing advice ends every non-empty result."""
        week = weekly_bucket(
            average_ratio=1.8,
            active_days=7,
            risk_days=7,
            max_ratio=2.6,
            min_ratio=1.1,
            trend_direction=TrendDirection.INCREASING,
            trend_percent=40.0,
        )
        result = generator.generate([week], [])

        assert result[-2:] == list(CLOSING_RECOMMENDATIONS)
        assert result[:-2] == messages_of(
            "reduce_intensity",
            "review_plan",
            "rest_day",
            "avoid_rapid_increase",
            "consistent_intensity",
        )

    def test_custom_rules(self) -> None:
        """Test a replacement table is honored."""
        rule = RecommendationRule(
            name="always", applies=lambda ctx, cfg: True, messages=("Hydrate.",)
        )
        generator = RecommendationGenerator(rules=[rule])

        assert generator.generate([weekly_bucket()], []) == ["Hydrate."] + list(
            CLOSING_RECOMMENDATIONS
        )


class TestRecommendationConfig:
    """Tests for configurable recommendation cut-offs."""

    def test_defaults_from_settings(self) -> None:
        """Test the default config mirrors the settings defaults."""
        config = RecommendationConfig.from_settings(Settings())

        assert config.high_average_ratio == 1.5
        assert config.low_average_ratio == 0.8
        assert config.maintain_average_ratio == 1.3
        assert config.max_active_days == 6

    def test_custom_high_average(self) -> None:
        """Test a lowered high cut-off changes which rule fires."""
        generator = RecommendationGenerator(
            RecommendationConfig(high_average_ratio=1.3, maintain_average_ratio=1.2)
        )
        result = generator.generate([weekly_bucket(average_ratio=1.4, active_days=5)], [])

        assert result == messages_of("reduce_intensity") + list(CLOSING_RECOMMENDATIONS)

    def test_custom_frequency_band(self) -> None:
        """Test active-day limits follow the config."""
        generator = RecommendationGenerator(
            RecommendationConfig(min_active_days=5, max_active_days=5)
        )

        assert messages_of("increase_frequency")[0] in generator.generate(
            [weekly_bucket(active_days=4)], []
        )
        assert messages_of("rest_day")[0] in generator.generate(
            [weekly_bucket(active_days=6)], []
        )

    def test_settings_override(self) -> None:
        """Test nested settings feed the generator config."""
        settings = Settings(recommendation=RecommendationThresholds(rapid_trend_percent=5.0))
        generator = RecommendationGenerator(RecommendationConfig.from_settings(settings))
        week = weekly_bucket(
            active_days=5, trend_direction=TrendDirection.INCREASING, trend_percent=8.0
        )

        assert messages_of("avoid_rapid_increase")[0] in generator.generate([week], [])
