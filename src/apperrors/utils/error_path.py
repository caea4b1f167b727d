"""Source location of an exception for log records."""

import traceback

__all__ = ["get_error_path"]

_PACKAGE = "apperrors"


def get_error_path(err: BaseException) -> str:
    """Format where an exception was raised as ``file:line (fn:function)``.

    Paths inside the service package are shortened to start at the package
    directory; other paths are kept as they are.

    Args:
        err: The exception, raised so that it carries a traceback.

    Returns:
        str: The formatted location, or ``unknown`` without a traceback.
    """
    frames = traceback.extract_tb(err.__traceback__)
    if not frames:
        return "unknown"

    filename, line, func, _ = frames[-1]
    if _PACKAGE in filename:
        filename = _PACKAGE + filename.rsplit(_PACKAGE, 1)[-1]
    return f"{filename}:{line} (fn:{func})"
