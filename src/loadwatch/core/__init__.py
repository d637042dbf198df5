"""Core infrastructure: civil clock and structured logging."""

from loadwatch.core.clock import (
    Clock,
    DEFAULT_OFFSET_HOURS,
    FixedOffsetClock,
    FrozenClock,
    months_before,
    parse_civil_date,
)
from loadwatch.core.logging import LogContext, get_logger, setup_logging

__all__ = [
    "Clock",
    "DEFAULT_OFFSET_HOURS",
    "FixedOffsetClock",
    "FrozenClock",
    "months_before",
    "parse_civil_date",
    "LogContext",
    "get_logger",
    "setup_logging",
]
