"""Application error router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from loguru import logger

from apperrors.context import ErrorContext
from apperrors.dependencies import get_error_context, get_error_store

from .exceptions import ErrorRecordNotFoundError
from .models import ErrorRecordPublic
from .pagination import DEFAULT_PAGE_SIZE
from .schemas import ErrorRecordPage, GotErrorsResponse, ResolvedCountResponse
from .service import get_error_page_svc
from .status import ErrorStatus
from .store import ErrorStore

__all__ = ["got_errors_router", "router"]


router = APIRouter(tags=["Application Errors"])

got_errors_router = APIRouter(tags=["Application Errors"])


@router.get("", summary="Get a page of application errors")
async def get_errors(
    store: Annotated[ErrorStore, Depends(get_error_store)],
    status: Annotated[
        str, Query(description="ALL, RESOLVED or UNRESOLVED, blank means ALL")
    ] = ErrorStatus.UNRESOLVED,
    page_number: Annotated[
        int, Query(alias="pageNumber", description="Page number, starts at 1")
    ] = 1,
    page_size: Annotated[
        int, Query(alias="pageSize", description="Errors per page")
    ] = DEFAULT_PAGE_SIZE,
) -> ErrorRecordPage:
    """Returns a page of application errors, most recently updated first.

    Args:
        store: The error store.
        status: Status filter, case-insensitive. Defaults to UNRESOLVED.
        page_number: The page number. Defaults to 1.
        page_size: The page size. Defaults to 25.

    Returns:
        ErrorRecordPage: The requested page plus the total number of errors
        matching the status.

    Raises:
        InvalidStatusError: If the status is not recognized.
        InvalidPagingError: If page number or page size is below 1.
    """
    page = await get_error_page_svc(
        store, ErrorStatus.parse(status), page_number, page_size
    )
    logger.debug(
        "Application errors retrieved",
        status=status,
        page_number=page_number,
        page_size=page_size,
        total=page.total_count,
    )
    return page


@router.get("/{error_id}", summary="Get an application error by ID")
async def get_error(
    error_id: int, store: Annotated[ErrorStore, Depends(get_error_store)]
) -> ErrorRecordPublic:
    """Retrieve a single application error.

    Raises:
        ErrorRecordNotFoundError: If no error has this ID.
    """
    record = await store.get_by_id(error_id)
    if record is None:
        raise ErrorRecordNotFoundError(error_id)
    return ErrorRecordPublic.model_validate(record)


@router.put("/resolve/{error_id}", summary="Resolve an application error")
async def resolve_error(
    error_id: int, store: Annotated[ErrorStore, Depends(get_error_store)]
) -> ErrorRecordPublic:
    """Mark one application error resolved and return it.

    Raises:
        ErrorRecordNotFoundError: If no error has this ID.
    """
    record = await store.resolve(error_id)
    logger.debug("Application error resolved", error_id=error_id)
    return ErrorRecordPublic.model_validate(record)


@router.put("/resolve", summary="Resolve all unresolved application errors")
async def resolve_all_errors(
    store: Annotated[ErrorStore, Depends(get_error_store)],
) -> ResolvedCountResponse:
    """Resolve every unresolved application error."""
    count = await store.resolve_all_unresolved()
    logger.debug("All application errors resolved", count=count)
    return ResolvedCountResponse(resolved_count=count)


@got_errors_router.get("", summary="Whether this service records errors")
async def got_errors(
    context: Annotated[ErrorContext, Depends(get_error_context)],
) -> GotErrorsResponse:
    """Report that errors are recorded and whether the store is shared."""
    return GotErrorsResponse(shared=context.data_store_type.shared)
