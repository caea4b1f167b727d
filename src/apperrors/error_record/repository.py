"""Error record repository."""

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from loguru import logger
from sqlalchemy import ColumnElement, Update, and_, delete, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlmodel import col, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from apperrors.config.errors import ErrorNames

from .exceptions import ErrorRecordNotFoundError, InvalidErrorRecordError
from .models import UNRESOLVED_INDEX_WHERE, ErrorRecord, description_hash, utc_now
from .status import ErrorStatus

__all__ = [
    "UPSERT_DIALECTS",
    "count_error_records_db",
    "delete_error_records_before_db",
    "find_unresolved_error_records_db",
    "get_error_record_db",
    "increment_error_record_db",
    "insert_error_record_db",
    "list_error_records_db",
    "resolve_all_error_records_db",
    "resolve_error_record_db",
    "upsert_error_record_db",
]

UPSERT_DIALECTS = {"sqlite": sqlite.insert, "postgresql": postgresql.insert}


def _status_filter(status: ErrorStatus) -> list[ColumnElement[bool]]:
    match status:
        case ErrorStatus.RESOLVED:
            return [col(ErrorRecord.resolved).is_(True)]
        case ErrorStatus.UNRESOLVED:
            return [col(ErrorRecord.resolved).is_(False)]
        case _:
            return []


def _new_row_values(record: ErrorRecord) -> dict[str, Any]:
    now = utc_now()
    return {
        "created_at": now,
        "updated_at": now,
        "num_times_occurred": 1,
        "description": record.description,
        "description_hash": description_hash(record.description),
        "exception_type": record.exception_type,
        "exception_message": record.exception_message,
        "exception_cause_type": record.exception_cause_type,
        "exception_cause_message": record.exception_cause_message,
        "stack_trace": record.stack_trace,
        "resolved": False,
        "host_name": record.host_name,
        "ip_address": record.ip_address,
        "port": record.port,
    }


def _increment_stmt(*conditions: ColumnElement[bool]) -> Update:
    return (
        update(ErrorRecord)
        .where(*conditions)
        .values(
            num_times_occurred=col(ErrorRecord.num_times_occurred) + 1,
            updated_at=utc_now(),
        )
    )


async def get_error_record_db(db: AsyncSession, error_id: int) -> ErrorRecord | None:
    """Retrieve an error record by its ID.

    Args:
        db: Database session instance.
        error_id: The ID of the record to retrieve.

    Returns:
        ErrorRecord | None: The record, or None if the ID is unknown.
    """
    return await db.get(ErrorRecord, error_id)


async def count_error_records_db(
    db: AsyncSession,
    status: ErrorStatus,
    *,
    since: datetime | None = None,
    host_name: str | None = None,
    ip_address: str | None = None,
) -> int:
    """Count error records.

    Args:
        db: Database session instance.
        status: Status filter.
        since: Only count records updated at or after this time.
        host_name: Only count records of this host.
        ip_address: Only count records of this IP address.

    Returns:
        int: Number of matching records.
    """
    conditions = _status_filter(status)
    if since is not None:
        conditions.append(col(ErrorRecord.updated_at) >= since)
    if host_name is not None:
        conditions.append(col(ErrorRecord.host_name) == host_name)
    if ip_address is not None:
        conditions.append(col(ErrorRecord.ip_address) == ip_address)

    stmt = select(func.count()).select_from(ErrorRecord).where(*conditions)
    total = await db.scalar(stmt)
    return total or 0


async def list_error_records_db(
    db: AsyncSession, status: ErrorStatus, offset: int, limit: int
) -> Sequence[ErrorRecord]:
    """Fetch a slice of error records, most recently updated first.

    Args:
        db: Database session instance.
        status: Status filter.
        offset: Number of records to skip.
        limit: Maximum number of records to return.

    Returns:
        Sequence[ErrorRecord]: The records of the slice.
    """
    stmt = (
        select(ErrorRecord)
        .where(*_status_filter(status))
        .order_by(col(ErrorRecord.updated_at).desc(), col(ErrorRecord.id).desc())
        .offset(offset)
        .limit(limit)
    )
    result = await db.exec(stmt)
    items = result.all()

    logger.debug("Error records listed", status=status, offset=offset, count=len(items))
    return items


async def find_unresolved_error_records_db(
    db: AsyncSession, description: str, host_name: str | None = None
) -> Sequence[ErrorRecord]:
    """Fetch unresolved records with an exact description, optionally per host.

    Args:
        db: Database session instance.
        description: Description to match exactly.
        host_name: Optional host to match exactly.

    Returns:
        Sequence[ErrorRecord]: The matching unresolved records.
    """
    stmt = select(ErrorRecord).where(
        col(ErrorRecord.resolved).is_(False),
        col(ErrorRecord.description_hash) == description_hash(description),
        col(ErrorRecord.description) == description,
    )
    if host_name is not None:
        stmt = stmt.where(col(ErrorRecord.host_name) == host_name)

    result = await db.exec(stmt)
    return result.all()


async def insert_error_record_db(db: AsyncSession, record: ErrorRecord) -> int:
    """Persist a copy of the record as a new unresolved error.

    Args:
        db: Database session instance.
        record: The record to copy. It is not modified.

    Returns:
        int: The ID of the new record.

    Raises:
        InvalidErrorRecordError: If the same error is already unresolved on
            this host.
    """
    row = ErrorRecord(**_new_row_values(record))
    db.add(row)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise InvalidErrorRecordError(
            ErrorNames.DUPLICATE_UNRESOLVED_ERROR.format(host=record.host_name)
        ) from e
    await db.refresh(row)

    logger.debug("Error record inserted", error_id=row.id, description=row.description)
    return row.id  # type: ignore[return-value]


async def upsert_error_record_db(db: AsyncSession, record: ErrorRecord) -> int:
    """Increment the unresolved record for description and host, or insert it.

    Runs as a single ``INSERT ... ON CONFLICT DO UPDATE`` against the partial
    unique index on unresolved records, so concurrent occurrences of the same
    error never create a second record.

    Args:
        db: Database session instance.
        record: The new occurrence.

    Returns:
        int: The ID of the incremented or inserted record.
    """
    insert = UPSERT_DIALECTS[db.bind.dialect.name]
    values = _new_row_values(record)
    table = ErrorRecord.__table__  # type: ignore[attr-defined]
    stmt = insert(table).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.description_hash, table.c.host_name],
        index_where=UNRESOLVED_INDEX_WHERE,
        set_={
            "num_times_occurred": table.c.num_times_occurred + 1,
            "updated_at": values["updated_at"],
        },
    ).returning(table.c.id)

    error_id = (await db.exec(stmt)).scalar_one()  # type: ignore[call-overload]
    await db.commit()

    logger.debug(
        "Error record inserted or incremented",
        error_id=error_id,
        description=record.description,
        host_name=record.host_name,
    )
    return error_id


async def increment_error_record_db(db: AsyncSession, error_id: int) -> None:
    """Add one occurrence to a record in a single update statement.

    Args:
        db: Database session instance.
        error_id: The ID of the record.

    Raises:
        ErrorRecordNotFoundError: If no record has this ID.
    """
    stmt = _increment_stmt(col(ErrorRecord.id) == error_id)
    result = await db.exec(stmt)  # type: ignore[call-overload]
    if result.rowcount == 0:  # type: ignore[attr-defined]
        await db.rollback()
        raise ErrorRecordNotFoundError(error_id)
    await db.commit()

    logger.debug("Error record count incremented", error_id=error_id)


async def resolve_error_record_db(db: AsyncSession, error_id: int) -> ErrorRecord:
    """Mark a record resolved and return its stored state.

    Only ``resolved`` and ``updated_at`` are written, so a concurrent
    increment on the same row is never lost.

    Args:
        db: Database session instance.
        error_id: The ID of the record.

    Returns:
        ErrorRecord: The resolved record.

    Raises:
        ErrorRecordNotFoundError: If no record has this ID.
    """
    stmt = (
        update(ErrorRecord)
        .where(col(ErrorRecord.id) == error_id)
        .values(resolved=True, updated_at=utc_now())
    )
    result = await db.exec(stmt)  # type: ignore[call-overload]
    if result.rowcount == 0:  # type: ignore[attr-defined]
        await db.rollback()
        raise ErrorRecordNotFoundError(error_id)
    await db.commit()

    record = await db.get(ErrorRecord, error_id, populate_existing=True)
    if record is None:
        raise ErrorRecordNotFoundError(error_id)

    logger.debug("Error record resolved", error_id=error_id)
    return record


async def resolve_all_error_records_db(db: AsyncSession) -> int:
    """Resolve every unresolved record.

    Args:
        db: Database session instance.

    Returns:
        int: Number of records resolved.
    """
    stmt = (
        update(ErrorRecord)
        .where(col(ErrorRecord.resolved).is_(False))
        .values(resolved=True, updated_at=utc_now())
    )
    result = await db.exec(stmt)  # type: ignore[call-overload]
    await db.commit()

    count: int = result.rowcount  # type: ignore[attr-defined]
    logger.debug("All unresolved error records resolved", count=count)
    return count


async def delete_error_records_before_db(
    db: AsyncSession, *, resolved: bool, expiration: datetime
) -> int:
    """Delete records of one status created strictly before a point in time.

    Args:
        db: Database session instance.
        resolved: Whether to delete resolved or unresolved records.
        expiration: Records created before this time are deleted.

    Returns:
        int: Number of records deleted.
    """
    stmt = delete(ErrorRecord).where(
        and_(
            col(ErrorRecord.resolved).is_(resolved),
            col(ErrorRecord.created_at) < expiration,
        )
    )
    result = await db.exec(stmt)  # type: ignore[call-overload]
    await db.commit()

    count: int = result.rowcount  # type: ignore[attr-defined]
    logger.debug(
        "Expired error records deleted",
        resolved=resolved,
        expiration=expiration,
        count=count,
    )
    return count
