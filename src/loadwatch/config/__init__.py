"""Configuration module for loadwatch."""

from loadwatch.config.settings import DuplicatePolicy, Settings, TrendThresholds, get_settings

__all__ = ["Settings", "get_settings", "DuplicatePolicy", "TrendThresholds"]
