"""Creation of unsaved error records."""

import traceback

from pydantic import BaseModel, ConfigDict

from apperrors.config.errors import ErrorNames

from .exceptions import MissingServiceDetailsError
from .models import ErrorRecord, utc_now
from .service_details import ServiceDetails
from .validation import check_not_blank

__all__ = ["ExceptionInfo", "new_error_record"]


class ExceptionInfo(BaseModel):
    """Diagnostic text extracted from an exception."""

    model_config = ConfigDict(frozen=True)

    exception_type: str
    exception_message: str | None
    exception_cause_type: str | None
    exception_cause_message: str | None
    stack_trace: str

    @classmethod
    def of(cls, exc: BaseException) -> "ExceptionInfo":
        """Extract type, message, cause and traceback of an exception."""
        cause = exc.__cause__ or exc.__context__
        return cls(
            exception_type=_qualified_name(exc),
            exception_message=str(exc) or None,
            exception_cause_type=_qualified_name(cause) if cause else None,
            exception_cause_message=(str(cause) or None) if cause else None,
            stack_trace="".join(traceback.format_exception(exc)),
        )


def _qualified_name(exc: BaseException) -> str:
    cls = type(exc)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def new_error_record(
    description: str,
    service_details: ServiceDetails | None,
    *,
    resolved: bool = False,
    exc: BaseException | None = None,
) -> ErrorRecord:
    """Create an unsaved error record stamped with the given identity.

    The record starts with an occurrence count of 1 and both timestamps set to
    now. Exception fields are either all filled from ``exc`` or all absent.

    Args:
        description: Non-blank description of the error.
        service_details: Identity of the reporting process.
        resolved: Initial resolution flag. Stores ignore it on insert.
        exc: Optional exception that caused the error.

    Returns:
        ErrorRecord: A record without an id.

    Raises:
        MissingServiceDetailsError: If no identity was established.
        InvalidErrorRecordError: If the description is blank.
    """
    if service_details is None:
        raise MissingServiceDetailsError

    check_not_blank(description, ErrorNames.BLANK_DESCRIPTION_ERROR)

    now = utc_now()
    record = ErrorRecord(
        created_at=now,
        updated_at=now,
        num_times_occurred=1,
        description=description,
        resolved=resolved,
        host_name=service_details.host_name,
        ip_address=service_details.ip_address,
        port=service_details.application_port,
    )

    if exc is not None:
        info = ExceptionInfo.of(exc)
        record.exception_type = info.exception_type
        record.exception_message = info.exception_message
        record.exception_cause_type = info.exception_cause_type
        record.exception_cause_message = info.exception_cause_message
        record.stack_trace = info.stack_trace

    return record
