"""Relational error store backed by SQLAlchemy."""

from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel.ext.asyncio.session import AsyncSession

from apperrors.config.errors import ErrorNames

from .exceptions import UnsupportedDatabaseError
from .models import ErrorRecord
from .pagination import zero_based_offset
from .repository import (
    UPSERT_DIALECTS,
    count_error_records_db,
    delete_error_records_before_db,
    find_unresolved_error_records_db,
    get_error_record_db,
    increment_error_record_db,
    insert_error_record_db,
    list_error_records_db,
    resolve_all_error_records_db,
    resolve_error_record_db,
    upsert_error_record_db,
)
from .service_details import ServiceDetails
from .status import ErrorStatus
from .store import ErrorStore
from .validation import check_insertable

__all__ = ["SQLErrorStore"]


class SQLErrorStore(ErrorStore):
    """Error store persisting records in the ``application_errors`` table.

    Every call runs in its own session taken from the engine's pool, so one
    instance can be shared by concurrent requests and background tasks.
    Only SQLite and PostgreSQL are accepted, as deduplication relies on their
    ``INSERT ... ON CONFLICT`` against a partial unique index.
    """

    def __init__(
        self, engine: AsyncEngine, service_details: ServiceDetails | None = None
    ) -> None:
        """Initialize with the engine owning the connection pool.

        Raises:
            UnsupportedDatabaseError: If the engine's dialect is not supported.
        """
        dialect = engine.dialect.name
        if dialect not in UPSERT_DIALECTS:
            raise UnsupportedDatabaseError(
                ErrorNames.UNSUPPORTED_DATABASE_ERROR.format(
                    dialect=dialect, supported=", ".join(sorted(UPSERT_DIALECTS))
                )
            )
        super().__init__(service_details)
        self.engine = engine

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession]:
        async with AsyncSession(self.engine, expire_on_commit=False) as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def get_by_id(self, error_id: int) -> ErrorRecord | None:
        async with self._session() as db:
            return await get_error_record_db(db, error_id)

    async def count_resolved(self) -> int:
        async with self._session() as db:
            return await count_error_records_db(db, ErrorStatus.RESOLVED)

    async def count_unresolved(self) -> int:
        async with self._session() as db:
            return await count_error_records_db(db, ErrorStatus.UNRESOLVED)

    async def count_all(self) -> int:
        async with self._session() as db:
            return await count_error_records_db(db, ErrorStatus.ALL)

    async def count_unresolved_since(self, since: datetime) -> int:
        async with self._session() as db:
            return await count_error_records_db(
                db, ErrorStatus.UNRESOLVED, since=since
            )

    async def count_unresolved_on_host_since(
        self, since: datetime, host_name: str, ip_address: str
    ) -> int:
        async with self._session() as db:
            return await count_error_records_db(
                db,
                ErrorStatus.UNRESOLVED,
                since=since,
                host_name=host_name,
                ip_address=ip_address,
            )

    async def list_by_status(
        self, status: ErrorStatus, page_number: int, page_size: int
    ) -> Sequence[ErrorRecord]:
        offset = zero_based_offset(page_number, page_size)
        async with self._session() as db:
            return await list_error_records_db(db, status, offset, page_size)

    async def find_unresolved_by_description(
        self, description: str
    ) -> Sequence[ErrorRecord]:
        async with self._session() as db:
            return await find_unresolved_error_records_db(db, description)

    async def find_unresolved_by_description_and_host(
        self, description: str, host_name: str
    ) -> Sequence[ErrorRecord]:
        async with self._session() as db:
            return await find_unresolved_error_records_db(db, description, host_name)

    async def insert(self, record: ErrorRecord) -> int:
        check_insertable(record)
        async with self._session() as db:
            return await insert_error_record_db(db, record)

    async def insert_or_increment(self, record: ErrorRecord) -> int:
        check_insertable(record)
        async with self._session() as db:
            return await upsert_error_record_db(db, record)

    async def increment_count(self, error_id: int) -> None:
        async with self._session() as db:
            await increment_error_record_db(db, error_id)

    async def resolve(self, error_id: int) -> ErrorRecord:
        async with self._session() as db:
            return await resolve_error_record_db(db, error_id)

    async def resolve_all_unresolved(self) -> int:
        async with self._session() as db:
            return await resolve_all_error_records_db(db)

    async def delete_resolved_before(self, expiration: datetime) -> int:
        async with self._session() as db:
            return await delete_error_records_before_db(
                db, resolved=True, expiration=expiration
            )

    async def delete_unresolved_before(self, expiration: datetime) -> int:
        async with self._session() as db:
            return await delete_error_records_before_db(
                db, resolved=False, expiration=expiration
            )
