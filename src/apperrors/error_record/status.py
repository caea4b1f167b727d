"""Error status filter."""

from enum import StrEnum

from .exceptions import InvalidStatusError

__all__ = ["ErrorStatus"]


class ErrorStatus(StrEnum):
    """Filter applied when counting or listing error records."""

    ALL = "ALL"
    RESOLVED = "RESOLVED"
    UNRESOLVED = "UNRESOLVED"

    @classmethod
    def parse(cls, value: str | None) -> "ErrorStatus":
        """Parse a status case-insensitively, mapping blank input to ALL.

        Args:
            value: Raw status, e.g. from a query parameter.

        Returns:
            ErrorStatus: The matching status.

        Raises:
            InvalidStatusError: If the value names no status.
        """
        if value is None or not value.strip():
            return cls.ALL

        try:
            return cls(value.upper())
        except ValueError as e:
            raise InvalidStatusError(value) from e
