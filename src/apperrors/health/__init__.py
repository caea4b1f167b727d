"""Health module."""

from .recent_errors import HealthResult, HealthSeverity, RecentErrorsHealthCheck
from .time_window import DEFAULT_TIME_WINDOW, TimeWindow, humanize

__all__ = [
    "DEFAULT_TIME_WINDOW",
    "HealthResult",
    "HealthSeverity",
    "RecentErrorsHealthCheck",
    "TimeWindow",
    "humanize",
]
