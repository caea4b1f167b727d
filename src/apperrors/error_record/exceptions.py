"""Error record exceptions."""

from fastapi import status

from apperrors.common.app_error import AppError
from apperrors.common.exceptions import InvalidArgumentError, NotFoundError
from apperrors.config.errors import ErrorCode

__all__ = [
    "ErrorRecordNotFoundError",
    "InvalidErrorRecordError",
    "InvalidPagingError",
    "InvalidStatusError",
    "MissingServiceDetailsError",
    "UnsupportedDatabaseError",
]


class ErrorRecordNotFoundError(NotFoundError):
    """Exception raised when no error record exists for an id."""

    def __init__(self, error_id: int) -> None:
        """Initialize with the unknown error id."""
        self.error_id = error_id
        super().__init__(f"Application error with id {error_id} not found")


class InvalidPagingError(InvalidArgumentError):
    """Exception raised for a page number or page size below 1."""

    error_code = ErrorCode.INVALID_PAGING


class InvalidStatusError(InvalidArgumentError):
    """Exception raised when a status value cannot be parsed."""

    error_code = ErrorCode.INVALID_STATUS

    def __init__(self, value: str) -> None:
        """Initialize with the rejected value."""
        super().__init__(
            f"Invalid status '{value}', expected one of ALL, RESOLVED, UNRESOLVED"
        )


class InvalidErrorRecordError(InvalidArgumentError):
    """Exception raised for an error record with malformed fields."""

    error_code = ErrorCode.INVALID_ERROR_RECORD
    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT


class MissingServiceDetailsError(AppError):
    """Exception raised when a record is created without a host identity."""

    error_code = ErrorCode.MISSING_SERVICE_DETAILS
    message = (
        "Service details (host name, IP address and port) must be set "
        "before error records can be created"
    )


class UnsupportedDatabaseError(AppError):
    """Exception raised for a database without conditional upserts."""

    error_code = ErrorCode.UNSUPPORTED_DATABASE
