"""Contract shared by all error record stores."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime

from .factory import new_error_record
from .models import ErrorRecord
from .service_details import ServiceDetails
from .status import ErrorStatus

__all__ = ["ErrorStore"]


class ErrorStore(ABC):
    """Persistence of application errors.

    Implementations must make ``insert_or_increment`` atomic: concurrent
    reports of the same unresolved description on the same host never yield
    two unresolved records. Listings are ordered by ``updated_at``, newest
    first, and page numbers start at 1.
    """

    def __init__(self, service_details: ServiceDetails | None = None) -> None:
        """Initialize with the identity stamped on records from ``new_error``."""
        self.service_details = service_details

    def new_error(
        self, description: str, exc: BaseException | None = None
    ) -> ErrorRecord:
        """Create an unsaved record stamped with this store's identity.

        Raises:
            MissingServiceDetailsError: If the store has no identity.
        """
        return new_error_record(description, self.service_details, exc=exc)

    @abstractmethod
    async def get_by_id(self, error_id: int) -> ErrorRecord | None:
        """Return the record with the given id, or None."""

    async def count(self, status: ErrorStatus) -> int:
        """Count records matching a status filter."""
        match status:
            case ErrorStatus.RESOLVED:
                return await self.count_resolved()
            case ErrorStatus.UNRESOLVED:
                return await self.count_unresolved()
            case _:
                return await self.count_all()

    @abstractmethod
    async def count_resolved(self) -> int:
        """Count resolved records."""

    @abstractmethod
    async def count_unresolved(self) -> int:
        """Count unresolved records."""

    @abstractmethod
    async def count_all(self) -> int:
        """Count all records."""

    @abstractmethod
    async def count_unresolved_since(self, since: datetime) -> int:
        """Count unresolved records updated at or after ``since``."""

    @abstractmethod
    async def count_unresolved_on_host_since(
        self, since: datetime, host_name: str, ip_address: str
    ) -> int:
        """Count unresolved records of one host updated at or after ``since``.

        Both host name and IP address must match.
        """

    async def list_all(self, page_number: int, page_size: int) -> Sequence[ErrorRecord]:
        """Return one page of all records."""
        return await self.list_by_status(ErrorStatus.ALL, page_number, page_size)

    @abstractmethod
    async def list_by_status(
        self, status: ErrorStatus, page_number: int, page_size: int
    ) -> Sequence[ErrorRecord]:
        """Return one page of records matching a status filter.

        Raises:
            InvalidPagingError: If page number or page size is below 1.
        """

    @abstractmethod
    async def find_unresolved_by_description(
        self, description: str
    ) -> Sequence[ErrorRecord]:
        """Return unresolved records with exactly this description."""

    @abstractmethod
    async def find_unresolved_by_description_and_host(
        self, description: str, host_name: str
    ) -> Sequence[ErrorRecord]:
        """Return unresolved records with this description on one host."""

    @abstractmethod
    async def insert(self, record: ErrorRecord) -> int:
        """Insert a new unresolved record with fresh timestamps.

        The given record is not updated; fetch it by the returned id to see
        the stored values.

        Raises:
            InvalidErrorRecordError: If the record has an id or invalid fields,
                or the same error is already unresolved on the same host.
        """

    @abstractmethod
    async def insert_or_increment(self, record: ErrorRecord) -> int:
        """Increment the matching unresolved record or insert a new one.

        Returns:
            int: Id of the incremented or inserted record.

        Raises:
            InvalidErrorRecordError: If the record has an id or invalid fields.
        """

    @abstractmethod
    async def increment_count(self, error_id: int) -> None:
        """Add one occurrence to a record and refresh its update time.

        Raises:
            ErrorRecordNotFoundError: If no record has this id.
        """

    @abstractmethod
    async def resolve(self, error_id: int) -> ErrorRecord:
        """Mark a record resolved and return it.

        Raises:
            ErrorRecordNotFoundError: If no record has this id.
        """

    @abstractmethod
    async def resolve_all_unresolved(self) -> int:
        """Resolve every unresolved record and return how many changed."""

    @abstractmethod
    async def delete_resolved_before(self, expiration: datetime) -> int:
        """Delete resolved records created strictly before ``expiration``."""

    @abstractmethod
    async def delete_unresolved_before(self, expiration: datetime) -> int:
        """Delete unresolved records created strictly before ``expiration``."""
