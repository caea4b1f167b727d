# ruff: noqa: S101

"""Tests for the recent errors health check."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from apperrors.error_record import (
    ErrorStore,
    InMemoryErrorStore,
    ServiceDetails,
    new_error_record,
)
from apperrors.health import HealthSeverity, RecentErrorsHealthCheck
from apperrors.health.recent_errors import QUERY_FAILED_MESSAGE

pytestmark = [pytest.mark.asyncio, pytest.mark.health]

_SUFFIX = (
    " error(s) created or updated in last 15 minutes on host "
    "test-host (10.0.0.1:8080)"
)


def _mock_store(**kwargs: object) -> AsyncMock:
    store = AsyncMock(spec=ErrorStore)
    store.count_unresolved_on_host_since = AsyncMock(**kwargs)
    return store


async def test_healthy_without_recent_errors(
    service_details: ServiceDetails,
) -> None:
    """No recent errors means healthy."""
    check = RecentErrorsHealthCheck(_mock_store(return_value=0), service_details)

    result = await check.check()

    assert result.healthy
    assert result.severity is HealthSeverity.OK
    assert result.message == "No" + _SUFFIX


async def test_unhealthy_with_recent_errors(
    service_details: ServiceDetails,
) -> None:
    """Recent errors make the check fail with their count."""
    check = RecentErrorsHealthCheck(_mock_store(return_value=5), service_details)

    result = await check.check()

    assert not result.healthy
    assert result.severity is HealthSeverity.WARN
    assert result.message == "5" + _SUFFIX


async def test_critical_when_query_fails(service_details: ServiceDetails) -> None:
    """A failing query is reported, not raised."""
    failure = RuntimeError("database down")
    check = RecentErrorsHealthCheck(
        _mock_store(side_effect=failure), service_details
    )

    result = await check.check()

    assert not result.healthy
    assert result.severity is HealthSeverity.CRITICAL
    assert result.message == QUERY_FAILED_MESSAGE
    assert result.error is failure
    assert "error" not in result.model_dump()


async def test_queries_local_host_within_window(
    service_details: ServiceDetails,
) -> None:
    """The store is asked about this host since the start of the window."""
    store = _mock_store(return_value=0)
    check = RecentErrorsHealthCheck(store, service_details, timedelta(hours=1))

    await check.check()

    await_args = store.count_unresolved_on_host_since.await_args
    since, host_name, ip_address = await_args.args
    assert host_name == "test-host"
    assert ip_address == "10.0.0.1"
    assert since.tzinfo is not None
    assert check.human_readable_time_window == "1 hour"


async def test_ignores_other_hosts_and_resolved_errors(
    memory_store: InMemoryErrorStore,
    service_details: ServiceDetails,
    other_service_details: ServiceDetails,
) -> None:
    """Only unresolved errors of this host count."""
    await memory_store.insert(new_error_record("Elsewhere", other_service_details))
    resolved_id = await memory_store.insert(memory_store.new_error("Fixed"))
    await memory_store.resolve(resolved_id)
    check = RecentErrorsHealthCheck(memory_store, service_details)

    assert (await check.check()).healthy

    await memory_store.insert(memory_store.new_error("Here"))

    result = await check.check()
    assert not result.healthy
    assert result.message == "1" + _SUFFIX
