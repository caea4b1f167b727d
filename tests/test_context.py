# ruff: noqa: S101

"""Tests for wiring the error context."""

from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine

from apperrors.cleanup import CleanupConfig, CleanupStrategy
from apperrors.config.config import Settings
from apperrors.context import (
    ErrorContextOptions,
    build_error_context,
    build_error_context_with_store,
    build_in_memory_error_context,
    build_noop_error_context,
)
from apperrors.error_record import (
    DataStoreType,
    InMemoryErrorStore,
    NoOpErrorStore,
    ServiceDetails,
    SQLErrorStore,
)
from apperrors.health import TimeWindow

pytestmark = pytest.mark.asyncio


async def test_build_from_settings(
    engine: AsyncEngine, service_details: ServiceDetails
) -> None:
    """Settings decide the store identity, sharing mode and options."""
    config = Settings(
        db_url="sqlite+aiosqlite:///ignored.db",
        data_store_type="SHARED",
        add_cleanup_job=False,
        time_window_minutes=30,
    )

    context = build_error_context(engine, config, service_details)

    assert isinstance(context.store, SQLErrorStore)
    assert context.store.service_details == service_details
    assert context.data_store_type is DataStoreType.NOT_SHARED
    assert context.cleanup_scheduler is None
    assert context.recent_errors_health_check is not None
    assert context.recent_errors_health_check.human_readable_time_window == (
        "30 minutes"
    )


async def test_build_uses_configured_identity(engine: AsyncEngine) -> None:
    """Without explicit details the configured host is used."""
    config = Settings(host_name="configured", ip_address="10.9.8.7", port=9000)

    context = build_error_context(engine, config)

    assert context.service_details == ServiceDetails(
        host_name="configured", ip_address="10.9.8.7", application_port=9000
    )


async def test_options_from_settings() -> None:
    """Flags, window and retention are read from settings."""
    options = ErrorContextOptions.from_settings(
        Settings(
            add_errors_resource=False,
            add_got_errors_resource=False,
            time_window_minutes=5,
            cleanup_strategy="RESOLVED_ONLY",
        )
    )

    assert not options.add_errors_resource
    assert not options.add_got_errors_resource
    assert options.add_health_check
    assert options.time_window == TimeWindow(duration=timedelta(minutes=5))
    assert options.cleanup_config.cleanup_strategy is CleanupStrategy.RESOLVED_ONLY


async def test_store_without_identity_adopts_it(
    service_details: ServiceDetails,
) -> None:
    """A store built without service details gets the context's."""
    store = InMemoryErrorStore()

    context = build_error_context_with_store(store, service_details)

    assert store.service_details == service_details
    assert context.data_store_type is DataStoreType.SHARED
    assert store.new_error("Boom").host_name == "test-host"


async def test_in_memory_context(service_details: ServiceDetails) -> None:
    """The in-memory context records and reports errors locally."""
    context = build_in_memory_error_context(service_details)

    error_id = await context.reporter.report("Boom")

    assert isinstance(context.store, InMemoryErrorStore)
    assert context.data_store_type is DataStoreType.NOT_SHARED
    assert error_id is not None
    assert context.recent_errors_health_check is not None
    assert not (await context.recent_errors_health_check.check()).healthy


async def test_noop_context(service_details: ServiceDetails) -> None:
    """The no-op context accepts reports and stays healthy."""
    context = build_noop_error_context(service_details)

    assert isinstance(context.store, NoOpErrorStore)
    assert await context.reporter.report("Boom") == 0
    assert context.recent_errors_health_check is not None
    assert (await context.recent_errors_health_check.check()).healthy
    assert (await context.store.resolve(7)).resolved


async def test_start_and_stop_cleanup(service_details: ServiceDetails) -> None:
    """Starting the context schedules the cleanup job until stopped."""
    options = ErrorContextOptions(
        cleanup_config=CleanupConfig(initial_job_delay=timedelta(hours=1))
    )
    context = build_in_memory_error_context(service_details, options)
    assert context.cleanup_scheduler is not None

    context.start()
    assert context.cleanup_scheduler.running

    await context.stop()
    assert not context.cleanup_scheduler.running


async def test_disabled_parts_are_absent(service_details: ServiceDetails) -> None:
    """Disabled health check and cleanup are not created."""
    context = build_in_memory_error_context(
        service_details,
        ErrorContextOptions(add_health_check=False, add_cleanup_job=False),
    )

    context.start()
    await context.stop()

    assert context.recent_errors_health_check is None
    assert context.cleanup_scheduler is None
