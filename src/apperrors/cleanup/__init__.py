"""Cleanup of expired application errors."""

from .config import CleanupConfig, CleanupStrategy
from .job import CleanupErrorsJob, CleanupOutcome
from .scheduler import CleanupScheduler

__all__ = [
    "CleanupConfig",
    "CleanupErrorsJob",
    "CleanupOutcome",
    "CleanupScheduler",
    "CleanupStrategy",
]
