"""
Configuration management for the model filter.

Settings are loaded from TOML files and MODEL_FILTER_* environment
variables. See config/default.toml for all options.

Example:
    >>> from model_filter.config import get_settings
    >>>
    >>> settings = get_settings()
    >>> print(settings.filter.date_error_policy)
"""

from model_filter.config.settings import (
    DateErrorPolicy,
    FilterSettings,
    LoggingSettings,
    SessionSettings,
    Settings,
    get_settings,
    load_settings,
    reload_settings,
)

__all__ = [
    "DateErrorPolicy",
    "FilterSettings",
    "LoggingSettings",
    "SessionSettings",
    "Settings",
    "get_settings",
    "load_settings",
    "reload_settings",
]
