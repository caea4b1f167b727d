"""Paging of error record listings."""

from apperrors.config.errors import ErrorNames

from .exceptions import InvalidPagingError

__all__ = ["DEFAULT_PAGE_SIZE", "zero_based_offset"]

DEFAULT_PAGE_SIZE = 25


def zero_based_offset(page_number: int, page_size: int) -> int:
    """Convert a 1-based page number into a row offset.

    Args:
        page_number: Page number, starts at 1.
        page_size: Number of records per page.

    Returns:
        int: ``(page_number - 1) * page_size``.

    Raises:
        InvalidPagingError: If page number or page size is below 1.
    """
    if page_number < 1:
        raise InvalidPagingError(ErrorNames.PAGE_NUMBER_ERROR.format(value=page_number))
    if page_size < 1:
        raise InvalidPagingError(ErrorNames.PAGE_SIZE_ERROR.format(value=page_size))
    return (page_number - 1) * page_size
