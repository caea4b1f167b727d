"""Application error service."""

from .schemas import ErrorRecordPage
from .status import ErrorStatus
from .store import ErrorStore

__all__ = ["get_error_page_svc"]


async def get_error_page_svc(
    store: ErrorStore, status: ErrorStatus, page_number: int, page_size: int
) -> ErrorRecordPage:
    """Read one page of errors and the number of errors with that status.

    Args:
        store: The error store.
        status: Status filter.
        page_number: Page number, starts at 1.
        page_size: Number of errors per page.

    Returns:
        ErrorRecordPage: The page.

    Raises:
        InvalidPagingError: If page number or page size is below 1.
    """
    items = await store.list_by_status(status, page_number, page_size)
    total = await store.count(status)
    return ErrorRecordPage.from_query(
        items=items, total=total, page_number=page_number, page_size=page_size
    )
