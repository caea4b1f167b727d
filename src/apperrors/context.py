"""Wiring of the error store, health check and cleanup job."""

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncEngine

from apperrors.cleanup import CleanupConfig, CleanupErrorsJob, CleanupScheduler
from apperrors.config.config import Settings, settings
from apperrors.error_record.datastore_type import (
    DataStoreType,
    resolve_data_store_type,
)
from apperrors.error_record.memory_store import InMemoryErrorStore
from apperrors.error_record.noop_store import NoOpErrorStore
from apperrors.error_record.reporter import ErrorReporter
from apperrors.error_record.service_details import ServiceDetails
from apperrors.error_record.sql_store import SQLErrorStore
from apperrors.error_record.store import ErrorStore
from apperrors.health import RecentErrorsHealthCheck, TimeWindow

__all__ = [
    "ErrorContext",
    "ErrorContextOptions",
    "build_error_context",
    "build_error_context_with_store",
    "build_in_memory_error_context",
    "build_noop_error_context",
]


class ErrorContextOptions(BaseModel):
    """Which parts of the error handling a service enables."""

    model_config = ConfigDict(frozen=True)

    add_errors_resource: bool = True
    add_got_errors_resource: bool = True
    add_health_check: bool = True
    add_cleanup_job: bool = True
    time_window: TimeWindow = Field(default_factory=TimeWindow)
    cleanup_config: CleanupConfig = Field(default_factory=CleanupConfig)

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "ErrorContextOptions":
        """Read the feature flags, time window and cleanup setup from settings."""
        return cls(
            add_errors_resource=config.add_errors_resource,
            add_got_errors_resource=config.add_got_errors_resource,
            add_health_check=config.add_health_check,
            add_cleanup_job=config.add_cleanup_job,
            time_window=TimeWindow(duration=config.time_window),
            cleanup_config=CleanupConfig.from_settings(config),
        )


class ErrorContext:
    """Everything a service needs to record and inspect its errors."""

    def __init__(
        self,
        store: ErrorStore,
        service_details: ServiceDetails,
        data_store_type: DataStoreType,
        options: ErrorContextOptions,
    ) -> None:
        """Create the health check and cleanup scheduler the options ask for."""
        self.store = store
        self.service_details = service_details
        self.data_store_type = data_store_type
        self.options = options
        self.reporter = ErrorReporter(store)

        self.recent_errors_health_check: RecentErrorsHealthCheck | None = None
        if options.add_health_check:
            self.recent_errors_health_check = RecentErrorsHealthCheck(
                store, service_details, options.time_window
            )

        self.cleanup_scheduler: CleanupScheduler | None = None
        if options.add_cleanup_job:
            cleanup = options.cleanup_config
            self.cleanup_scheduler = CleanupScheduler(
                CleanupErrorsJob(cleanup, store),
                initial_delay=cleanup.initial_job_delay,
                interval=cleanup.job_interval,
                name=cleanup.cleanup_job_name,
            )

    def start(self) -> None:
        """Start background work, i.e. the cleanup scheduler."""
        if self.cleanup_scheduler is not None:
            self.cleanup_scheduler.start()

    async def stop(self) -> None:
        """Stop background work."""
        if self.cleanup_scheduler is not None:
            await self.cleanup_scheduler.stop()


def build_error_context_with_store(
    store: ErrorStore,
    service_details: ServiceDetails,
    data_store_type: DataStoreType = DataStoreType.SHARED,
    options: ErrorContextOptions | None = None,
) -> ErrorContext:
    """Build a context around an existing store."""
    if store.service_details is None:
        store.service_details = service_details

    context = ErrorContext(
        store, service_details, data_store_type, options or ErrorContextOptions()
    )
    logger.info(
        "Error context created",
        store=type(store).__name__,
        data_store_type=data_store_type,
        service=str(service_details),
    )
    return context


def build_error_context(
    engine: AsyncEngine,
    config: Settings = settings,
    service_details: ServiceDetails | None = None,
) -> ErrorContext:
    """Build a context persisting errors through the given engine.

    The sharing mode is detected from the database URL unless the settings
    override it.

    Args:
        engine: Engine of the error database.
        config: Settings with database URL, identity and feature flags.
        service_details: Identity to use instead of the configured one.

    Returns:
        ErrorContext: The context backed by a SQLErrorStore.
    """
    service_details = service_details or ServiceDetails.from_settings(config)
    return build_error_context_with_store(
        SQLErrorStore(engine, service_details),
        service_details,
        resolve_data_store_type(config.db_url, config.data_store_type),
        ErrorContextOptions.from_settings(config),
    )


def build_in_memory_error_context(
    service_details: ServiceDetails,
    options: ErrorContextOptions | None = None,
) -> ErrorContext:
    """Build a context keeping errors in process memory."""
    return build_error_context_with_store(
        InMemoryErrorStore(service_details),
        service_details,
        DataStoreType.NOT_SHARED,
        options,
    )


def build_noop_error_context(
    service_details: ServiceDetails,
    options: ErrorContextOptions | None = None,
) -> ErrorContext:
    """Build a context that discards all errors."""
    return build_error_context_with_store(
        NoOpErrorStore(service_details),
        service_details,
        DataStoreType.NOT_SHARED,
        options,
    )
