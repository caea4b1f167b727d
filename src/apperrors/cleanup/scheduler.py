"""Periodic execution of the cleanup job."""

import asyncio
from datetime import timedelta

from loguru import logger

from .job import CleanupErrorsJob, CleanupOutcome

__all__ = ["CleanupScheduler"]


class CleanupScheduler:
    """Runs a cleanup job on an asyncio task at a fixed interval.

    The task waits for the initial delay, runs the job, then waits for the
    interval before the next run until ``stop`` cancels it.
    """

    def __init__(
        self,
        job: CleanupErrorsJob,
        initial_delay: timedelta,
        interval: timedelta,
        name: str = "Application-Errors-Cleanup-Job",
    ) -> None:
        """Initialize with the job and its timing."""
        self.job = job
        self.initial_delay = initial_delay
        self.interval = interval
        self.name = name
        self.last_outcome: CleanupOutcome | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        """Whether the scheduling task is alive."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the scheduling task on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name=self.name)
        logger.info(
            "Cleanup job scheduled",
            name=self.name,
            initial_delay=str(self.initial_delay),
            interval=str(self.interval),
        )

    async def stop(self) -> None:
        """Cancel the scheduling task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)
        self._task = None
        logger.info("Cleanup job stopped", name=self.name)

    async def _loop(self) -> None:
        await asyncio.sleep(self.initial_delay.total_seconds())
        while True:
            self.last_outcome = await self.job.run()
            logger.debug(
                "Cleanup job run finished",
                succeeded=self.last_outcome.succeeded,
                resolved_deleted=self.last_outcome.resolved_deleted,
                unresolved_deleted=self.last_outcome.unresolved_deleted,
            )
            await asyncio.sleep(self.interval.total_seconds())
