"""Field checks shared by error records and service details."""

from typing import TYPE_CHECKING

from apperrors.config.errors import ErrorNames

from .exceptions import InvalidErrorRecordError

if TYPE_CHECKING:
    from .models import ErrorRecord

__all__ = ["check_insertable", "check_not_blank", "check_port", "is_valid_port"]

_MAX_PORT = 65535


def is_valid_port(port: int) -> bool:
    """Whether the port lies in the range 0 to 65535."""
    return 0 <= port <= _MAX_PORT


def check_port(port: int) -> int:
    """Return the port or raise InvalidErrorRecordError if it is out of range."""
    if not is_valid_port(port):
        raise InvalidErrorRecordError(ErrorNames.INVALID_PORT_ERROR.format(value=port))
    return port


def check_not_blank(value: str | None, error: ErrorNames) -> str:
    """Return the value or raise InvalidErrorRecordError if it is blank."""
    if value is None or not value.strip():
        raise InvalidErrorRecordError(error)
    return value


def check_insertable(record: "ErrorRecord") -> None:
    """Validate a record before it is written by a store.

    Raises:
        InvalidErrorRecordError: If the record already has an id or carries a
            blank description, host name or IP address, or an invalid port.
    """
    if record.id is not None:
        raise InvalidErrorRecordError(ErrorNames.RECORD_HAS_ID_ERROR)
    check_not_blank(record.description, ErrorNames.BLANK_DESCRIPTION_ERROR)
    check_not_blank(record.host_name, ErrorNames.BLANK_HOST_NAME_ERROR)
    check_not_blank(record.ip_address, ErrorNames.BLANK_IP_ADDRESS_ERROR)
    check_port(record.port)
