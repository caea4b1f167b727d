"""Error record models."""

import hashlib
from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, computed_field, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy import Index, String, Text, text
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator
from sqlmodel import Column, DateTime, Field, SQLModel

__all__ = [
    "UNRESOLVED_INDEX_WHERE",
    "ErrorRecord",
    "ErrorRecordPublic",
    "UTCDateTime",
    "as_utc",
    "description_hash",
    "to_millis",
    "utc_now",
]

UNRESOLVED_INDEX_WHERE = text("NOT resolved")

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(tz=UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, as read back from SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_millis(value: datetime) -> int:
    """Milliseconds since the epoch."""
    return (as_utc(value) - _EPOCH) // timedelta(milliseconds=1)


def description_hash(description: str) -> str:
    """SHA-256 hex digest of a description, the indexed part of the dedup key."""
    return hashlib.sha256(description.encode("utf-8")).hexdigest()


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware datetime stored and read back as UTC.

    SQLite keeps no offset, so values are converted to UTC before binding and
    get UTC attached when loaded. Naive values are taken as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        return as_utc(value) if value is not None else None

    def process_result_value(
        self, value: Any, dialect: Dialect
    ) -> datetime | None:
        return as_utc(value) if value is not None else None


class ErrorRecord(SQLModel, table=True):
    """An application error, deduplicated per description and host."""

    __tablename__ = "application_errors"
    __table_args__ = (
        # At most one unresolved record per description hash and host
        Index(
            "ux_application_errors_unresolved",
            "description_hash",
            "host_name",
            unique=True,
            sqlite_where=UNRESOLVED_INDEX_WHERE,
            postgresql_where=UNRESOLVED_INDEX_WHERE,
        ),
    )

    id: int | None = Field(default=None, primary_key=True)

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(UTCDateTime(), nullable=False),
        description="Timestamp when the error was first recorded.",
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(UTCDateTime(), nullable=False, index=True),
        description="Timestamp of the last occurrence or resolution.",
    )

    num_times_occurred: int = Field(
        default=1, description="How often this error occurred."
    )

    description: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Description of the error.",
    )

    description_hash: str | None = Field(
        default=None,
        sa_column=Column(String(64), nullable=False),
        description="SHA-256 of the description, the first part of the dedup key.",
    )

    exception_type: str | None = Field(
        default=None,
        sa_column=Column(Text),
        description="Fully qualified type of the causing exception.",
    )

    exception_message: str | None = Field(
        default=None,
        sa_column=Column(Text),
        description="Message of the causing exception.",
    )

    exception_cause_type: str | None = Field(
        default=None,
        sa_column=Column(Text),
        description="Type of the exception behind the causing exception.",
    )

    exception_cause_message: str | None = Field(
        default=None,
        sa_column=Column(Text),
        description="Message of the exception behind the causing exception.",
    )

    stack_trace: str | None = Field(
        default=None,
        sa_column=Column(Text),
        description="Formatted traceback of the causing exception.",
    )

    resolved: bool = Field(default=False, index=True)

    host_name: str = Field(description="Host the error was reported on.")

    ip_address: str = Field(description="IP address of the reporting host.")

    port: int = Field(description="Port of the reporting service.")

    @property
    def created_at_millis(self) -> int:
        """Creation time in epoch milliseconds."""
        return to_millis(self.created_at)

    @property
    def updated_at_millis(self) -> int:
        """Last update time in epoch milliseconds."""
        return to_millis(self.updated_at)


class ErrorRecordPublic(BaseModel):
    """Error record as returned by the HTTP endpoints."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    created_at: datetime
    updated_at: datetime
    num_times_occurred: int
    description: str
    exception_type: str | None = None
    exception_message: str | None = None
    exception_cause_type: str | None = None
    exception_cause_message: str | None = None
    stack_trace: str | None = None
    resolved: bool
    host_name: str
    ip_address: str
    port: int

    @field_validator("created_at", "updated_at")
    @classmethod
    def _normalize_timezone(cls, value: datetime) -> datetime:
        return as_utc(value)

    @computed_field(alias="createdAtMillis")  # type: ignore[prop-decorator]
    @property
    def created_at_millis(self) -> int:
        """Creation time in epoch milliseconds."""
        return to_millis(self.created_at)

    @computed_field(alias="updatedAtMillis")  # type: ignore[prop-decorator]
    @property
    def updated_at_millis(self) -> int:
        """Last update time in epoch milliseconds."""
        return to_millis(self.updated_at)
