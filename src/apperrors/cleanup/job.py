"""Job deleting expired application errors."""

from datetime import datetime

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from apperrors.error_record.models import utc_now
from apperrors.error_record.store import ErrorStore

from .config import CleanupConfig, CleanupStrategy

__all__ = ["CleanupErrorsJob", "CleanupOutcome"]


class CleanupOutcome(BaseModel):
    """Result of one cleanup run."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    started_at: datetime
    resolved_deleted: int = 0
    unresolved_deleted: int | None = None
    error: BaseException | None = Field(default=None, exclude=True)

    @property
    def succeeded(self) -> bool:
        """Whether the run completed without an error."""
        return self.error is None


class CleanupErrorsJob:
    """Deletes errors older than their configured retention.

    Resolved errors are always cleaned up; unresolved errors only with the
    ``ALL_ERRORS`` strategy. A run never raises, store failures end up in the
    returned outcome.
    """

    def __init__(self, config: CleanupConfig, store: ErrorStore) -> None:
        """Initialize with the retention settings and the store to clean."""
        self.config = config
        self.store = store

    async def run(self) -> CleanupOutcome:
        """Delete expired errors once.

        Returns:
            CleanupOutcome: Deleted counts, or the error that stopped the run.
        """
        now = utc_now()
        outcome = CleanupOutcome(started_at=now)
        try:
            outcome.resolved_deleted = await self.store.delete_resolved_before(
                now - self.config.resolved_error_expiration
            )
            logger.debug(
                "Deleted expired resolved application errors",
                count=outcome.resolved_deleted,
            )

            if self.config.cleanup_strategy is CleanupStrategy.ALL_ERRORS:
                outcome.unresolved_deleted = await self.store.delete_unresolved_before(
                    now - self.config.unresolved_error_expiration
                )
                logger.debug(
                    "Deleted expired unresolved application errors",
                    count=outcome.unresolved_deleted,
                )
        except Exception as e:
            logger.opt(exception=e).error("Application errors cleanup failed")
            outcome.error = e

        return outcome
