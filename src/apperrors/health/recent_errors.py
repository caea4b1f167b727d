"""Health check reporting unresolved errors of the last minutes."""

from datetime import timedelta
from enum import StrEnum

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from apperrors.error_record.models import utc_now
from apperrors.error_record.service_details import ServiceDetails
from apperrors.error_record.store import ErrorStore

from .time_window import DEFAULT_TIME_WINDOW, TimeWindow

__all__ = ["HealthResult", "HealthSeverity", "RecentErrorsHealthCheck"]

QUERY_FAILED_MESSAGE = "Error executing recent error count database query"


class HealthSeverity(StrEnum):
    """Severity attached to a health result."""

    OK = "ok"
    WARN = "warn"
    CRITICAL = "critical"


class HealthResult(BaseModel):
    """Outcome of a health check."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    healthy: bool
    message: str
    severity: HealthSeverity = HealthSeverity.OK
    error: BaseException | None = Field(default=None, exclude=True)

    @classmethod
    def ok(cls, message: str) -> "HealthResult":
        """Create a healthy result."""
        return cls(healthy=True, message=message)

    @classmethod
    def unhealthy(
        cls,
        message: str,
        severity: HealthSeverity = HealthSeverity.WARN,
        error: BaseException | None = None,
    ) -> "HealthResult":
        """Create an unhealthy result."""
        return cls(healthy=False, message=message, severity=severity, error=error)


class RecentErrorsHealthCheck:
    """Unhealthy while this host has unresolved errors inside the time window.

    Only errors created or updated on the local host name and IP address
    count. The check never raises; a failing store query yields a critical
    result carrying the exception.
    """

    def __init__(
        self,
        store: ErrorStore,
        service_details: ServiceDetails,
        time_window: TimeWindow | timedelta = DEFAULT_TIME_WINDOW,
    ) -> None:
        """Initialize with the store, the local identity and the window."""
        if isinstance(time_window, timedelta):
            time_window = TimeWindow(duration=time_window)

        self.store = store
        self.service_details = service_details
        self.time_window = time_window.duration
        self.human_readable_time_window = time_window.human_readable
        self._message_suffix = (
            f" error(s) created or updated in last {self.human_readable_time_window}"
            f" on host {service_details}"
        )
        logger.debug(
            "Recent errors health check created",
            time_window=self.human_readable_time_window,
        )

    async def check(self) -> HealthResult:
        """Count unresolved errors of this host updated within the window."""
        since = utc_now() - self.time_window
        try:
            count = await self.store.count_unresolved_on_host_since(
                since, self.service_details.host_name, self.service_details.ip_address
            )
        except Exception as e:
            logger.opt(exception=e).warning(QUERY_FAILED_MESSAGE)
            return HealthResult.unhealthy(
                QUERY_FAILED_MESSAGE, severity=HealthSeverity.CRITICAL, error=e
            )

        if count > 0:
            return HealthResult.unhealthy(f"{count}{self._message_suffix}")
        return HealthResult.ok(f"No{self._message_suffix}")
