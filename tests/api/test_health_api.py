# ruff: noqa: S101

"""Tests for the health endpoints."""

from collections.abc import Generator

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from apperrors.app import app
from apperrors.context import ErrorContextOptions, build_in_memory_error_context
from apperrors.dependencies import get_error_context
from apperrors.error_record import ServiceDetails, SQLErrorStore


@pytest.fixture
def disabled_health_client(
    service_details: ServiceDetails,
) -> Generator[TestClient]:
    """Client whose error context has no recent errors health check."""
    context = build_in_memory_error_context(
        service_details, ErrorContextOptions(add_health_check=False)
    )
    app.dependency_overrides[get_error_context] = lambda: context
    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.mark.asyncio
@pytest.mark.health
@pytest.mark.api
class TestHealth:
    """Tests for the liveness endpoints."""

    @classmethod
    async def test_root(cls, client: TestClient) -> None:
        """The root answers OK."""
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.text == "OK"

    @classmethod
    async def test_health(cls, client: TestClient) -> None:
        """The liveness probe has no content."""
        response = client.get("/health")

        assert response.status_code == status.HTTP_204_NO_CONTENT


@pytest.mark.asyncio
@pytest.mark.health
@pytest.mark.api
class TestRecentErrors:
    """Tests for the recent errors health endpoint."""

    @classmethod
    async def test_healthy(cls, client: TestClient) -> None:
        """Without recent errors the check passes."""
        response = client.get("/health/recent-errors")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["healthy"] is True
        assert body["severity"] == "ok"
        assert body["message"].startswith("No error(s) created or updated in last")

    @classmethod
    async def test_unhealthy(
        cls, client: TestClient, sql_store: SQLErrorStore
    ) -> None:
        """Recent unresolved errors make the check fail with 503."""
        await sql_store.insert(sql_store.new_error("Boom"))
        await sql_store.insert(sql_store.new_error("Bang"))

        response = client.get("/health/recent-errors")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        body = response.json()
        assert body["healthy"] is False
        assert body["severity"] == "warn"
        assert body["message"] == (
            "2 error(s) created or updated in last 15 minutes on host "
            "test-host (10.0.0.1:8080)"
        )

    @classmethod
    async def test_healthy_after_resolve(
        cls, client: TestClient, sql_store: SQLErrorStore
    ) -> None:
        """Resolved errors no longer count."""
        await sql_store.insert(sql_store.new_error("Boom"))
        await sql_store.resolve_all_unresolved()

        response = client.get("/health/recent-errors")

        assert response.status_code == status.HTTP_200_OK

    @classmethod
    async def test_disabled(cls, disabled_health_client: TestClient) -> None:
        """A disabled check reports the service unavailable."""
        response = disabled_health_client.get("/health/recent-errors")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["code"] == "SERVICE_UNAVAILABLE"
