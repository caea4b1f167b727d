"""Text constants for consistent error handling."""

from enum import StrEnum

__all__ = ["ErrorCode", "ErrorNames"]


class ErrorCode(StrEnum):
    """Error codes for standardized error handling."""

    # General errors
    SERVER_ERROR = "SERVER_ERROR"
    NOT_FOUND = "NOT_FOUND"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    # Application error records
    INVALID_PAGING = "INVALID_PAGING"
    INVALID_STATUS = "INVALID_STATUS"
    INVALID_ERROR_RECORD = "INVALID_ERROR_RECORD"
    MISSING_SERVICE_DETAILS = "MISSING_SERVICE_DETAILS"
    UNSUPPORTED_DATABASE = "UNSUPPORTED_DATABASE"


class ErrorNames(StrEnum):
    """Error names for standardized error handling."""

    INTERNAL_SERVER_ERROR = "Internal server error"

    # Paging errors
    PAGE_NUMBER_ERROR = "pageNumber must be at least 1, was {value}"
    PAGE_SIZE_ERROR = "pageSize must be at least 1, was {value}"

    # Record validation errors
    BLANK_DESCRIPTION_ERROR = "description must not be blank"
    BLANK_HOST_NAME_ERROR = "hostName must not be blank"
    BLANK_IP_ADDRESS_ERROR = "ipAddress must not be blank"
    INVALID_PORT_ERROR = "port must be a valid port, was {value}"
    RECORD_HAS_ID_ERROR = "Cannot insert an error record that has an id"
    DUPLICATE_UNRESOLVED_ERROR = (
        "An unresolved error with this description already exists on host {host}"
    )

    # Store errors
    UNSUPPORTED_DATABASE_ERROR = (
        "Database dialect {dialect} is not supported, use one of {supported}"
    )
