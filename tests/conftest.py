"""Pytest fixtures for loadwatch tests."""

from collections.abc import Generator
from datetime import UTC, datetime

import pytest
import structlog

from loadwatch.config.settings import Settings, get_settings
from loadwatch.core.clock import FrozenClock


# =============================================================================
# Structlog Configuration Fixture
# =============================================================================


@pytest.fixture(scope="function", autouse=True)
def reset_structlog_after_test():
    """Reset structlog configuration after each test.

    This ensures tests that modify structlog global state
    don't affect other tests.
    """
    yield
    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Drop cached settings so environment patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with library defaults."""
    return Settings(ENVIRONMENT="test", log_level="DEBUG")


@pytest.fixture
def frozen_clock() -> FrozenClock:
    """Clock pinned to 2025-04-01 09:00 UTC (18:00 in UTC+9)."""
    return FrozenClock(datetime(2025, 4, 1, 9, 0, tzinfo=UTC))

