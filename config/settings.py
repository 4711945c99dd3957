"""
Configuration management for git-wrapped.

This module provides centralized configuration with:
- Typed defaults for the wrapped report (year, window semantics, timezone)
- Git traversal settings
- Logging configuration
- Environment variable and .env overrides (prefix ``GIT_WRAPPED_``)
"""

from datetime import tzinfo
from functools import lru_cache
from typing import Optional, Dict, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import BaseSettings as PydanticBaseSettings

from shared.errors import ConfigurationError
from shared.models import WindowMode


class WrappedSettings(BaseSettings):
    """Defaults for the wrapped report."""

    default_year: int = Field(default=2023, description="Year analyzed when --year is omitted")
    window_mode: WindowMode = Field(
        default=WindowMode.CALENDAR, description="Year window semantics (calendar/legacy)"
    )
    timezone: Optional[str] = Field(
        default=None, description="IANA timezone for the year boundaries (default: system local)"
    )

    @field_validator("default_year")
    @classmethod
    def validate_default_year(cls, v):
        if not 1 <= v <= 9998:
            raise ValueError("Default year must be between 1 and 9998")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v):
        if v is None or not v.strip():
            return None
        try:
            ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v.strip()

    def tz(self) -> Optional[tzinfo]:
        """Timezone used for the year boundaries, ``None`` meaning system local."""
        return ZoneInfo(self.timezone) if self.timezone else None

    model_config = {"env_prefix": "GIT_WRAPPED_WRAPPED_", "extra": "ignore"}


class GitSettings(BaseSettings):
    """Git traversal settings."""

    rev: str = Field(default="--all", description="Revision set walked for commits")

    @field_validator("rev")
    @classmethod
    def validate_rev(cls, v):
        if not v or not v.strip():
            raise ValueError("Revision set cannot be empty")
        return v.strip()

    model_config = {"env_prefix": "GIT_WRAPPED_GIT_", "extra": "ignore"}


class MonitoringSettings(BaseSettings):
    """Logging configuration settings."""

    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format string",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    model_config = {"env_prefix": "GIT_WRAPPED_MONITORING_", "extra": "ignore"}


class Settings(PydanticBaseSettings):
    """
    Main application settings.

    Values come from, in order of precedence: explicit keyword arguments,
    environment variables (``GIT_WRAPPED_<GROUP>__<FIELD>``), the ``.env``
    file and the defaults below.
    """

    app_name: str = Field(default="git-wrapped", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")

    wrapped: WrappedSettings = Field(default_factory=WrappedSettings)
    git: GitSettings = Field(default_factory=GitSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "GIT_WRAPPED_",
        "case_sensitive": False,
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration object

    Example:
        >>> settings = get_settings()
        >>> print(settings.wrapped.default_year)
    """
    return Settings()


def load_settings() -> Settings:
    """
    Get application settings, reporting invalid values as a ConfigurationError.

    The error message lists every offending field on a single line, e.g.
    ``monitoring.log_level: Value error, Log level must be one of: [...]``.
    """
    try:
        return get_settings()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from e


def export_config() -> Dict[str, Any]:
    """Export the effective configuration for ``--verbose`` diagnostics."""
    settings = get_settings()
    return {
        "app_name": settings.app_name,
        "version": settings.version,
        "wrapped": {
            "default_year": settings.wrapped.default_year,
            "window_mode": settings.wrapped.window_mode.value,
            "timezone": settings.wrapped.timezone,
        },
        "git": {"rev": settings.git.rev},
        "monitoring": {"log_level": settings.monitoring.log_level},
    }
