"""Log-and-save entry point for application code."""

from loguru import logger

from apperrors.utils.prometheus import ERRORS_REPORTED

from .store import ErrorStore

__all__ = ["ErrorReporter"]


def _format_description(description: str, args: tuple[object, ...]) -> str:
    if not args:
        return description
    try:
        return description.format(*args)
    except (AttributeError, IndexError, KeyError, TypeError, ValueError):
        # Malformed template, keep every part of the report
        return " ".join([description, *map(str, args)])


class ErrorReporter:
    """Logs application errors and records them in an error store."""

    def __init__(self, store: ErrorStore) -> None:
        """Initialize with the store receiving the reports."""
        self.store = store

    async def report(
        self, description: str, *args: object, exc: BaseException | None = None
    ) -> int | None:
        """Log an error and save or increment its record.

        Args:
            description: Description, optionally a ``str.format`` template. A
                template that does not fit the arguments is kept as is, followed
                by the arguments.
            *args: Positional values for the template.
            exc: Optional exception that caused the error.

        Returns:
            int | None: Id of the saved record, or None if saving failed.
        """
        message = _format_description(description, args)
        logger.opt(exception=exc).error(
            "Application error reported: {description}", description=message
        )

        try:
            record = self.store.new_error(message, exc)
            error_id = await self.store.insert_or_increment(record)
        except Exception as e:
            ERRORS_REPORTED.labels(saved="false").inc()
            logger.opt(exception=e).error(
                "Failed to save application error", description=message
            )
            return None

        ERRORS_REPORTED.labels(saved="true").inc()
        return error_id
