"""In-memory error store."""

import asyncio
import itertools
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from loguru import logger

from apperrors.config.errors import ErrorNames

from .exceptions import ErrorRecordNotFoundError, InvalidErrorRecordError
from .models import ErrorRecord, as_utc, description_hash, utc_now
from .pagination import zero_based_offset
from .service_details import ServiceDetails
from .status import ErrorStatus
from .store import ErrorStore
from .validation import check_insertable

__all__ = ["InMemoryErrorStore"]


def _matches(status: ErrorStatus) -> Callable[[ErrorRecord], bool]:
    match status:
        case ErrorStatus.RESOLVED:
            return lambda record: record.resolved
        case ErrorStatus.UNRESOLVED:
            return lambda record: not record.resolved
        case _:
            return lambda _: True


def _copy(record: ErrorRecord, **changes: Any) -> ErrorRecord:
    return ErrorRecord.model_validate(record.model_dump() | changes)


class InMemoryErrorStore(ErrorStore):
    """Error store keeping records in a dict, for tests and single instances.

    All mutations run under one ``asyncio.Lock``; callers only ever receive
    copies of the stored records.
    """

    def __init__(self, service_details: ServiceDetails | None = None) -> None:
        """Initialize an empty store."""
        super().__init__(service_details)
        self._errors: dict[int, ErrorRecord] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    def _select(self, status: ErrorStatus) -> list[ErrorRecord]:
        return [r for r in self._errors.values() if _matches(status)(r)]

    async def get_by_id(self, error_id: int) -> ErrorRecord | None:
        record = self._errors.get(error_id)
        return _copy(record) if record else None

    async def count_resolved(self) -> int:
        return len(self._select(ErrorStatus.RESOLVED))

    async def count_unresolved(self) -> int:
        return len(self._select(ErrorStatus.UNRESOLVED))

    async def count_all(self) -> int:
        return len(self._errors)

    async def count_unresolved_since(self, since: datetime) -> int:
        since = as_utc(since)
        return sum(
            1
            for r in self._select(ErrorStatus.UNRESOLVED)
            if as_utc(r.updated_at) >= since
        )

    async def count_unresolved_on_host_since(
        self, since: datetime, host_name: str, ip_address: str
    ) -> int:
        since = as_utc(since)
        return sum(
            1
            for r in self._select(ErrorStatus.UNRESOLVED)
            if r.host_name == host_name
            and r.ip_address == ip_address
            and as_utc(r.updated_at) >= since
        )

    async def list_by_status(
        self, status: ErrorStatus, page_number: int, page_size: int
    ) -> Sequence[ErrorRecord]:
        offset = zero_based_offset(page_number, page_size)
        records = sorted(
            self._select(status),
            key=lambda r: (as_utc(r.updated_at), r.id),
            reverse=True,
        )
        return [_copy(r) for r in records[offset : offset + page_size]]

    async def find_unresolved_by_description(
        self, description: str
    ) -> Sequence[ErrorRecord]:
        return [
            _copy(r)
            for r in self._select(ErrorStatus.UNRESOLVED)
            if r.description == description
        ]

    async def find_unresolved_by_description_and_host(
        self, description: str, host_name: str
    ) -> Sequence[ErrorRecord]:
        return [
            _copy(r)
            for r in self._select(ErrorStatus.UNRESOLVED)
            if r.description == description and r.host_name == host_name
        ]

    def _insert_locked(self, record: ErrorRecord) -> int:
        error_id = next(self._ids)
        now = utc_now()
        self._errors[error_id] = _copy(
            record,
            id=error_id,
            description_hash=description_hash(record.description),
            created_at=now,
            updated_at=now,
            num_times_occurred=1,
            resolved=False,
        )
        return error_id

    def _increment_locked(self, error_id: int) -> None:
        record = self._errors.get(error_id)
        if record is None:
            raise ErrorRecordNotFoundError(error_id)
        self._errors[error_id] = _copy(
            record,
            num_times_occurred=record.num_times_occurred + 1,
            updated_at=utc_now(),
        )

    def _unresolved_match(self, record: ErrorRecord) -> ErrorRecord | None:
        return next(
            (
                r
                for r in self._select(ErrorStatus.UNRESOLVED)
                if r.description == record.description
                and r.host_name == record.host_name
            ),
            None,
        )

    async def insert(self, record: ErrorRecord) -> int:
        check_insertable(record)
        async with self._lock:
            if self._unresolved_match(record) is not None:
                raise InvalidErrorRecordError(
                    ErrorNames.DUPLICATE_UNRESOLVED_ERROR.format(host=record.host_name)
                )
            error_id = self._insert_locked(record)
        logger.debug("Error record inserted", error_id=error_id)
        return error_id

    async def insert_or_increment(self, record: ErrorRecord) -> int:
        check_insertable(record)
        async with self._lock:
            existing = self._unresolved_match(record)
            if existing is None:
                return self._insert_locked(record)

            self._increment_locked(existing.id)  # type: ignore[arg-type]
            return existing.id  # type: ignore[return-value]

    async def increment_count(self, error_id: int) -> None:
        async with self._lock:
            self._increment_locked(error_id)

    async def resolve(self, error_id: int) -> ErrorRecord:
        async with self._lock:
            record = self._errors.get(error_id)
            if record is None:
                raise ErrorRecordNotFoundError(error_id)
            resolved = _copy(record, resolved=True, updated_at=utc_now())
            self._errors[error_id] = resolved
        logger.debug("Error record resolved", error_id=error_id)
        return _copy(resolved)

    async def resolve_all_unresolved(self) -> int:
        async with self._lock:
            now = utc_now()
            unresolved = self._select(ErrorStatus.UNRESOLVED)
            for record in unresolved:
                self._errors[record.id] = _copy(  # type: ignore[index]
                    record, resolved=True, updated_at=now
                )
        return len(unresolved)

    async def _delete_before(self, *, resolved: bool, expiration: datetime) -> int:
        expiration = as_utc(expiration)
        async with self._lock:
            expired = [
                error_id
                for error_id, r in self._errors.items()
                if r.resolved is resolved and as_utc(r.created_at) < expiration
            ]
            for error_id in expired:
                del self._errors[error_id]
        return len(expired)

    async def delete_resolved_before(self, expiration: datetime) -> int:
        return await self._delete_before(resolved=True, expiration=expiration)

    async def delete_unresolved_before(self, expiration: datetime) -> int:
        return await self._delete_before(resolved=False, expiration=expiration)
