"""FastAPI dependencies resolving the error context of the application."""

from typing import Annotated

from fastapi import Depends, Request

from apperrors.common.exceptions import ServiceUnavailableError
from apperrors.context import ErrorContext
from apperrors.error_record.store import ErrorStore
from apperrors.health.recent_errors import RecentErrorsHealthCheck

__all__ = ["get_error_context", "get_error_store", "get_recent_errors_health_check"]


def get_error_context(request: Request) -> ErrorContext:
    """Return the error context created during application startup.

    Raises:
        ServiceUnavailableError: If the application has not started yet.
    """
    context: ErrorContext | None = getattr(request.app.state, "error_context", None)
    if context is None:
        raise ServiceUnavailableError("Error context is not initialized")
    return context


def get_error_store(
    context: Annotated[ErrorContext, Depends(get_error_context)],
) -> ErrorStore:
    """Return the error store of the application."""
    return context.store


def get_recent_errors_health_check(
    context: Annotated[ErrorContext, Depends(get_error_context)],
) -> RecentErrorsHealthCheck:
    """Return the recent errors health check.

    Raises:
        ServiceUnavailableError: If the health check is disabled.
    """
    if context.recent_errors_health_check is None:
        raise ServiceUnavailableError("Recent errors health check is disabled")
    return context.recent_errors_health_check
