"""Time window of the recent errors health check."""

from datetime import timedelta
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["DEFAULT_TIME_WINDOW", "MIN_DURATION", "TimeWindow", "humanize"]

DEFAULT_TIME_WINDOW: Final = timedelta(minutes=15)

MIN_DURATION: Final = timedelta(minutes=1)

_UNITS: Final = (
    ("day", 86_400_000),
    ("hour", 3_600_000),
    ("minute", 60_000),
    ("second", 1_000),
    ("millisecond", 1),
)


def humanize(duration: timedelta) -> str:
    """Describe a duration in words, e.g. ``4 hours 30 minutes``.

    Zero components before the first and after the last non-zero component are
    dropped, zeros in between are kept. A zero duration reads ``0 seconds``.

    Args:
        duration: Non-negative duration.

    Returns:
        str: The duration in words.
    """
    remaining = duration // timedelta(milliseconds=1)
    parts: list[tuple[int, str]] = []
    for unit, size in _UNITS:
        amount, remaining = divmod(remaining, size)
        parts.append((amount, unit))

    non_zero = [i for i, (amount, _) in enumerate(parts) if amount]
    if not non_zero:
        return "0 seconds"

    return " ".join(
        f"{amount} {unit if amount == 1 else unit + 's'}"
        for amount, unit in parts[non_zero[0] : non_zero[-1] + 1]
    )


class TimeWindow(BaseModel):
    """Trailing period in which unresolved errors make the service unhealthy."""

    model_config = ConfigDict(frozen=True)

    duration: timedelta = Field(
        default=DEFAULT_TIME_WINDOW,
        description="Length of the window, at least one minute.",
    )

    @field_validator("duration")
    @classmethod
    def _at_least_one_minute(cls, value: timedelta) -> timedelta:
        if value < MIN_DURATION:
            raise ValueError(f"duration must be at least 1 minute, was {value}")
        return value

    @property
    def human_readable(self) -> str:
        """The window in words."""
        return humanize(self.duration)
