"""Common exceptions."""

from fastapi import status

from apperrors.common.app_error import AppError
from apperrors.config.errors import ErrorCode

__all__ = [
    "InvalidArgumentError",
    "NotFoundError",
    "ServiceUnavailableError",
]


class NotFoundError(AppError):
    """Exception raised when something is not found."""

    error_code = ErrorCode.NOT_FOUND
    message = "Resource not found"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidArgumentError(AppError, ValueError):
    """Exception raised when a caller passes an invalid argument."""

    message = "Invalid argument"
    status_code = status.HTTP_400_BAD_REQUEST


class ServiceUnavailableError(AppError):
    """Exception raised when a required component is not configured."""

    error_code = ErrorCode.SERVICE_UNAVAILABLE
    message = "Service unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
