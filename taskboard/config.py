"""Configuration settings for taskboard.

Hierarchical configuration using pydantic-settings with field validation and
environment variable support.

Features:
- Nested BaseSettings classes for database and conflict rules
- Environment variable support with TASKBOARD_ prefix
- Support for .env files and secrets directories
- Cached global settings via get_settings()
"""

import logging
import os
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .conflicts.rules import (
    DEFAULT_DAILY_HOURS_LIMIT,
    DEFAULT_OVERLAP_HIGH_DAYS,
    DEFAULT_OVERLAP_MEDIUM_DAYS,
    DEFAULT_OVERLOAD_HIGH_HOURS,
    DEFAULT_OVERLOAD_MEDIUM_HOURS,
    DEFAULT_SHORT_OVERLAP_DAYS,
    ConflictRules,
)


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DatabaseSettings(BaseSettings):
    """Database configuration."""

    model_config = SettingsConfigDict(env_prefix="TASKBOARD_DATABASE_")

    url: str = Field(
        "sqlite:///taskboard.db", description="SQLAlchemy database connection URL"
    )
    echo_sql: bool = Field(False, description="Enable SQL query logging for debugging")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require a SQLAlchemy style URL."""
        if "://" not in v:
            raise ValueError(f"Invalid database URL: {v}")
        return v


class ConflictSettings(BaseSettings):
    """Thresholds for conflict detection."""

    model_config = SettingsConfigDict(env_prefix="TASKBOARD_CONFLICTS_")

    daily_hours_limit: float = Field(
        DEFAULT_DAILY_HOURS_LIMIT,
        gt=0.0,
        le=24.0,
        description="Hours per day above which a day counts as overloaded",
    )
    overload_medium_hours: float = Field(
        DEFAULT_OVERLOAD_MEDIUM_HOURS,
        gt=0.0,
        le=24.0,
        description="Hours per day above which an overload is MEDIUM",
    )
    overload_high_hours: float = Field(
        DEFAULT_OVERLOAD_HIGH_HOURS,
        gt=0.0,
        le=24.0,
        description="Hours per day above which an overload is HIGH",
    )
    overlap_medium_days: int = Field(
        DEFAULT_OVERLAP_MEDIUM_DAYS,
        ge=1,
        description="Overlapping days from which an overlap is MEDIUM",
    )
    overlap_high_days: int = Field(
        DEFAULT_OVERLAP_HIGH_DAYS,
        ge=1,
        description="Overlapping days from which an overlap is HIGH",
    )
    short_overlap_days: int = Field(
        DEFAULT_SHORT_OVERLAP_DAYS,
        ge=0,
        description="Overlaps up to this length get a date-shift suggestion",
    )

    @model_validator(mode="after")
    def validate_thresholds(self) -> "ConflictSettings":
        """Medium thresholds must sit below high thresholds."""
        if self.overload_medium_hours >= self.overload_high_hours:
            raise ValueError("overload_medium_hours must be below overload_high_hours")
        if self.overlap_medium_days >= self.overlap_high_days:
            raise ValueError("overlap_medium_days must be below overlap_high_days")
        return self

    def to_rules(self) -> ConflictRules:
        """Build the immutable rule set handed to the detector."""
        return ConflictRules(**self.model_dump())


class TaskboardSettings(BaseSettings):
    """Root configuration combining all subsystem settings."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    conflicts: ConflictSettings = Field(default_factory=ConflictSettings)

    # Development and debugging
    debug_mode: bool = Field(False, description="Enable debug logging")
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        env_prefix="TASKBOARD_",
        extra="ignore",
        validate_default=True,
        case_sensitive=False,
        # Support secrets file for production
        secrets_dir=os.getenv("TASKBOARD_SECRETS_DIR"),
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Expected one of {', '.join(VALID_LOG_LEVELS)}"
            )
        return level

    @property
    def effective_log_level(self) -> int:
        """Numeric level, forced to DEBUG in debug mode."""
        if self.debug_mode:
            return logging.DEBUG
        return logging.getLevelName(self.log_level)

    def get_conflict_rules(self) -> ConflictRules:
        """Conflict thresholds as a detector rule set."""
        return self.conflicts.to_rules()

    def summary(self) -> dict[str, Any]:
        """Configuration overview safe to print."""
        return {
            "database_url": self.database.url,
            "echo_sql": self.database.echo_sql,
            "log_level": self.log_level,
            "debug_mode": self.debug_mode,
            "conflicts": self.conflicts.model_dump(),
        }


# Global settings instance with caching
@lru_cache(maxsize=1)
def get_settings() -> TaskboardSettings:
    """Get cached global settings instance.

    Returns:
        Global TaskboardSettings instance

    """
    return TaskboardSettings()


def configure_logging(settings: TaskboardSettings | None = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


__all__ = [
    "ConflictSettings",
    "DatabaseSettings",
    "TaskboardSettings",
    "configure_logging",
    "get_settings",
]
