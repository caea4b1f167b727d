"""Common test fixtures for the application."""

import os

os.environ.setdefault("ENV", "testing")

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from apperrors.app import app
from apperrors.context import ErrorContext, build_error_context_with_store
from apperrors.dependencies import get_error_context
from apperrors.error_record import (
    DataStoreType,
    ErrorStore,
    InMemoryErrorStore,
    ServiceDetails,
    SQLErrorStore,
)


@pytest.fixture
def service_details() -> ServiceDetails:
    """Identity of the process under test."""
    return ServiceDetails(
        host_name="test-host", ip_address="10.0.0.1", application_port=8080
    )


@pytest.fixture
def other_service_details() -> ServiceDetails:
    """Identity of a second instance of the same service."""
    return ServiceDetails(
        host_name="other-host", ip_address="10.0.0.2", application_port=8080
    )


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Location of the SQLite database of one test."""
    return tmp_path / "app_errors.db"


@pytest.fixture
async def engine(db_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Create a test database engine with the schema in place.

    NullPool keeps connections from outliving the event loop that opened
    them, so the engine works from the test loop and the TestClient loop.
    """
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        poolclass=NullPool,
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def sql_store(engine: AsyncEngine, service_details: ServiceDetails) -> SQLErrorStore:
    """Error store on the test database."""
    return SQLErrorStore(engine, service_details)


@pytest.fixture
def memory_store(service_details: ServiceDetails) -> InMemoryErrorStore:
    """Error store keeping records in memory."""
    return InMemoryErrorStore(service_details)


@pytest.fixture(params=["sql_store", "memory_store"])
def store(request: pytest.FixtureRequest) -> ErrorStore:
    """Each persistent error store implementation in turn."""
    return request.getfixturevalue(request.param)


@pytest.fixture
def error_context(
    sql_store: SQLErrorStore, service_details: ServiceDetails
) -> ErrorContext:
    """Error context served by the test client."""
    return build_error_context_with_store(
        sql_store, service_details, DataStoreType.NOT_SHARED
    )


@pytest.fixture(name="client")
def client_fixture(error_context: ErrorContext) -> Generator[TestClient]:
    """Create a test client for the FastAPI app.

    Args:
        error_context: Error context replacing the one built at startup.

    Returns:
        TestClient: Configured FastAPI test client.
    """
    app.dependency_overrides[get_error_context] = lambda: error_context
    client = TestClient(app, base_url="http://testserver")  # NOSONAR
    yield client

    app.dependency_overrides.clear()
