"""Cleanup job configuration."""

from datetime import timedelta
from enum import StrEnum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from apperrors.config.config import Settings

__all__ = ["CleanupConfig", "CleanupStrategy"]

_MIN_DURATION: Final = timedelta(minutes=1)


class CleanupStrategy(StrEnum):
    """Which errors the cleanup job deletes."""

    ALL_ERRORS = "ALL_ERRORS"
    """Expired resolved and expired unresolved errors."""

    RESOLVED_ONLY = "RESOLVED_ONLY"
    """Expired resolved errors only."""


class CleanupConfig(BaseModel):
    """Retention and scheduling of the cleanup job.

    Every duration must be at least one minute; construction fails with a
    ``ValidationError`` otherwise.
    """

    model_config = ConfigDict(frozen=True)

    cleanup_strategy: CleanupStrategy = Field(
        default=CleanupStrategy.ALL_ERRORS,
        description="Which errors the job deletes.",
    )

    resolved_error_expiration: timedelta = Field(
        default=timedelta(days=14),
        description="Age after which resolved errors are deleted.",
    )

    unresolved_error_expiration: timedelta = Field(
        default=timedelta(days=60),
        description="Age after which unresolved errors are deleted.",
    )

    cleanup_job_name: str = Field(
        default="Application-Errors-Cleanup-Job",
        min_length=1,
        description="Name of the task running the job.",
    )

    initial_job_delay: timedelta = Field(
        default=timedelta(minutes=1),
        description="Delay before the first run.",
    )

    job_interval: timedelta = Field(
        default=timedelta(days=1),
        description="Delay between two runs.",
    )

    @field_validator(
        "resolved_error_expiration",
        "unresolved_error_expiration",
        "initial_job_delay",
        "job_interval",
    )
    @classmethod
    def _at_least_one_minute(cls, value: timedelta) -> timedelta:
        if value < _MIN_DURATION:
            raise ValueError(f"must be at least 1 minute, was {value}")
        return value

    @classmethod
    def from_settings(cls, config: Settings) -> "CleanupConfig":
        """Build the cleanup configuration from application settings."""
        return cls(
            cleanup_strategy=CleanupStrategy(config.cleanup_strategy),
            resolved_error_expiration=timedelta(
                days=config.resolved_error_expiration_days
            ),
            unresolved_error_expiration=timedelta(
                days=config.unresolved_error_expiration_days
            ),
            initial_job_delay=timedelta(minutes=config.initial_job_delay_minutes),
            job_interval=timedelta(minutes=config.job_interval_minutes),
        )
