"""
Configuration settings for the model filter.

Configuration hierarchy (later overrides earlier):
1. Default values (built-in)
2. config/default.toml
3. config/local.toml (gitignored)
4. File named by MODEL_FILTER_CONFIG_PATH
5. Environment variables (MODEL_FILTER_* prefix)

Example:
    >>> from model_filter.config import get_settings
    >>>
    >>> settings = get_settings()
    >>> print(settings.namespace)
    >>> print(settings.filter.date_error_policy)
"""

from __future__ import annotations

import os
import tomllib
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from model_filter.utils.time import DEFAULT_DATE_FORMATS, DEFAULT_DATETIME_FORMAT

ENV_PREFIX = "MODEL_FILTER_"
DEFAULT_NAMESPACE = "model_filter.filters"


class DateErrorPolicy(str, Enum):
    """What ``filter()`` does with an unparseable ``from``/``to`` value."""

    RAISE = "raise"
    SKIP = "skip"


class FilterSettings(BaseModel):
    """Rule application settings."""

    model_config = ConfigDict(extra="ignore")

    date_error_policy: DateErrorPolicy = Field(
        default=DateErrorPolicy.RAISE,
        description="Abort filtering or skip the rule on a bad date",
    )
    date_formats: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DATE_FORMATS),
        description="strptime formats accepted after ISO 8601",
    )
    datetime_format: str = Field(
        default=DEFAULT_DATETIME_FORMAT,
        description="Format of the day bounds passed to the query",
    )
    like_suffix: str = Field(
        default="%",
        description="Wildcard appended to values of like rules",
    )


class SessionSettings(BaseModel):
    """SQLite session store settings (used by the CLI)."""

    model_config = ConfigDict(extra="ignore")

    path: str = Field(
        default="model_filter_sessions.db",
        description="Session database file path",
    )
    session_id: str = Field(
        default="default",
        description="Session identifier",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="Connection timeout",
    )


class LoggingSettings(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(extra="ignore")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="console", description="Output format")
    include_timestamp: bool = Field(default=True)
    include_location: bool = Field(default=False)


class Settings(BaseModel):
    """Main settings container."""

    model_config = ConfigDict(extra="ignore")

    namespace: str = Field(
        default=DEFAULT_NAMESPACE,
        description="Top-level state store entry shared by all filter keys",
    )
    base_dir: Path = Field(default=Path("."))

    filter: FilterSettings = Field(default_factory=FilterSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def session_path(self) -> Path:
        """Get absolute session database path."""
        path = Path(self.session.path)
        if path.is_absolute():
            return path
        return self.base_dir / path


def _find_config_files() -> list[Path]:
    """Find configuration files in standard locations, lowest priority first."""
    files = []

    cwd = Path.cwd()
    for name in ["config/default.toml", "config/local.toml"]:
        path = cwd / name
        if path.exists():
            files.append(path)

    env_config = os.environ.get(f"{ENV_PREFIX}CONFIG_PATH")
    if env_config:
        path = Path(env_config)
        if path.exists():
            files.append(path)

    return files


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides.

    Section names are matched first, so MODEL_FILTER_FILTER_DATE_ERROR_POLICY
    sets ``filter.date_error_policy`` and MODEL_FILTER_NAMESPACE sets
    ``namespace``. List values are comma separated.

    Args:
        config: Configuration dictionary

    Returns:
        Modified configuration
    """
    sections = set(Settings.model_fields) - {"namespace", "base_dir"}

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX) or key == f"{ENV_PREFIX}CONFIG_PATH":
            continue

        config_key = key[len(ENV_PREFIX) :].lower()
        section, _, rest = config_key.partition("_")

        if section in sections and rest:
            field_info = Settings.model_fields[section].annotation.model_fields.get(rest)  # type: ignore[union-attr]
            if field_info is None:
                continue
            target = config.setdefault(section, {})
            if field_info.annotation == list[str]:
                target[rest] = [part.strip() for part in value.split(",") if part.strip()]
            else:
                target[rest] = value
        elif config_key in Settings.model_fields:
            config[config_key] = value

    return config


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from configuration files and the environment.

    Args:
        config_path: Optional explicit config file path

    Returns:
        Settings instance
    """
    config: dict[str, Any] = {}

    if config_path:
        files = [Path(config_path)]
    else:
        files = _find_config_files()

    for path in files:
        config = _merge_dicts(config, _load_toml(path))

    config = _apply_env_overrides(config)

    return Settings(**config)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()


def reload_settings() -> Settings:
    """Reload settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
