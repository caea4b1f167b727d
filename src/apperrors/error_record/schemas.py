"""Response models of the error record endpoints."""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .models import ErrorRecord, ErrorRecordPublic

__all__ = ["ErrorRecordPage", "GotErrorsResponse", "ResolvedCountResponse"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorRecordPage(_CamelModel):
    """One page of error records plus the total matching the filter."""

    items: list[ErrorRecordPublic]
    total_count: int
    page_number: int
    page_size: int

    @classmethod
    def from_query(
        cls,
        *,
        items: Sequence[ErrorRecord],
        total: int,
        page_number: int,
        page_size: int,
    ) -> "ErrorRecordPage":
        """Factory method to create a page from store results."""
        return cls(
            items=[ErrorRecordPublic.model_validate(item) for item in items],
            total_count=total,
            page_number=page_number,
            page_size=page_size,
        )


class ResolvedCountResponse(_CamelModel):
    """Number of records changed by a bulk resolve."""

    resolved_count: int


class GotErrorsResponse(BaseModel):
    """Whether the configured store is shared between instances."""

    shared: bool
