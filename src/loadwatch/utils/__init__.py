"""Utility modules for loadwatch."""

from loadwatch.utils.exceptions import (
    ConfigurationError,
    DuplicateRecordError,
    LoadwatchError,
    RecordValidationError,
)
from loadwatch.utils.rounding import round_half_up

__all__ = [
    "LoadwatchError",
    "ConfigurationError",
    "RecordValidationError",
    "DuplicateRecordError",
    "round_half_up",
]
