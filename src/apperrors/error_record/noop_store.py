"""Error store that stores nothing."""

from collections.abc import Sequence
from datetime import datetime

from .models import ErrorRecord, utc_now
from .service_details import ServiceDetails
from .status import ErrorStatus
from .store import ErrorStore

__all__ = ["NoOpErrorStore"]


class NoOpErrorStore(ErrorStore):
    """Error store for services that must run without persistence.

    Counts are zero, listings empty, and writes are discarded.
    """

    def __init__(self, service_details: ServiceDetails | None = None) -> None:
        """Initialize the store."""
        super().__init__(service_details)

    async def get_by_id(self, error_id: int) -> ErrorRecord | None:
        return None

    async def count_resolved(self) -> int:
        return 0

    async def count_unresolved(self) -> int:
        return 0

    async def count_all(self) -> int:
        return 0

    async def count_unresolved_since(self, since: datetime) -> int:
        return 0

    async def count_unresolved_on_host_since(
        self, since: datetime, host_name: str, ip_address: str
    ) -> int:
        return 0

    async def list_by_status(
        self, status: ErrorStatus, page_number: int, page_size: int
    ) -> Sequence[ErrorRecord]:
        return []

    async def find_unresolved_by_description(
        self, description: str
    ) -> Sequence[ErrorRecord]:
        return []

    async def find_unresolved_by_description_and_host(
        self, description: str, host_name: str
    ) -> Sequence[ErrorRecord]:
        return []

    async def insert(self, record: ErrorRecord) -> int:
        return 0

    async def insert_or_increment(self, record: ErrorRecord) -> int:
        return 0

    async def increment_count(self, error_id: int) -> None:
        return None

    async def resolve(self, error_id: int) -> ErrorRecord:
        """Return a made-up resolved record carrying the requested id."""
        now = utc_now()
        return ErrorRecord(
            id=error_id,
            created_at=now,
            updated_at=now,
            num_times_occurred=1,
            description="Fake error",
            resolved=True,
            host_name="localhost",
            ip_address="127.0.0.1",
            port=8080,
        )

    async def resolve_all_unresolved(self) -> int:
        return 0

    async def delete_resolved_before(self, expiration: datetime) -> int:
        return 0

    async def delete_unresolved_before(self, expiration: datetime) -> int:
        return 0
