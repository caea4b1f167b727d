"""Common module for shared error handling.

This module provides the foundational error types used throughout the service.
Every domain error derives from `AppError`, which carries a machine-readable
error code, a human-readable message and the HTTP status code the exception
handlers translate it into.
"""

from .app_error import AppError
from .exceptions import (
    InvalidArgumentError,
    NotFoundError,
    ServiceUnavailableError,
)

__all__ = [
    "AppError",
    "InvalidArgumentError",
    "NotFoundError",
    "ServiceUnavailableError",
]
