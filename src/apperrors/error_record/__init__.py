"""Application error record module."""

from .datastore_type import DataStoreType, data_store_type_of, resolve_data_store_type
from .exceptions import (
    ErrorRecordNotFoundError,
    InvalidErrorRecordError,
    InvalidPagingError,
    InvalidStatusError,
    MissingServiceDetailsError,
    UnsupportedDatabaseError,
)
from .factory import ExceptionInfo, new_error_record
from .memory_store import InMemoryErrorStore
from .models import ErrorRecord, ErrorRecordPublic
from .noop_store import NoOpErrorStore
from .pagination import DEFAULT_PAGE_SIZE, zero_based_offset
from .reporter import ErrorReporter
from .service_details import ServiceDetails
from .sql_store import SQLErrorStore
from .status import ErrorStatus
from .store import ErrorStore

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "DataStoreType",
    "ErrorRecord",
    "ErrorRecordNotFoundError",
    "ErrorRecordPublic",
    "ErrorReporter",
    "ErrorStatus",
    "ErrorStore",
    "ExceptionInfo",
    "InMemoryErrorStore",
    "InvalidErrorRecordError",
    "InvalidPagingError",
    "InvalidStatusError",
    "MissingServiceDetailsError",
    "NoOpErrorStore",
    "SQLErrorStore",
    "ServiceDetails",
    "UnsupportedDatabaseError",
    "data_store_type_of",
    "new_error_record",
    "resolve_data_store_type",
    "zero_based_offset",
]
