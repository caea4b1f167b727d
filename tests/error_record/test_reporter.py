# ruff: noqa: S101

"""Tests for reporting application errors."""

from unittest.mock import AsyncMock

import pytest

from apperrors.error_record import ErrorReporter, InMemoryErrorStore

pytestmark = [pytest.mark.asyncio, pytest.mark.error_record]


async def test_report_saves_new_error(memory_store: InMemoryErrorStore) -> None:
    """A first report stores a new unresolved error."""
    reporter = ErrorReporter(memory_store)

    error_id = await reporter.report("Payment {} failed for {}", 17, "alice")

    assert error_id is not None
    record = await memory_store.get_by_id(error_id)
    assert record is not None
    assert record.description == "Payment 17 failed for alice"
    assert record.num_times_occurred == 1
    assert record.host_name == "test-host"


async def test_report_increments_repeated_error(
    memory_store: InMemoryErrorStore,
) -> None:
    """Reporting the same error again counts another occurrence."""
    reporter = ErrorReporter(memory_store)

    first = await reporter.report("Connection lost")
    second = await reporter.report("Connection lost")

    assert first == second
    record = await memory_store.get_by_id(first)  # type: ignore[arg-type]
    assert record is not None
    assert record.num_times_occurred == 2


async def test_report_keeps_exception_details(
    memory_store: InMemoryErrorStore,
) -> None:
    """The causing exception is recorded with the error."""
    reporter = ErrorReporter(memory_store)

    try:
        raise RuntimeError("disk full")
    except RuntimeError as e:
        error_id = await reporter.report("Export failed", exc=e)

    record = await memory_store.get_by_id(error_id)  # type: ignore[arg-type]
    assert record is not None
    assert record.exception_type == "RuntimeError"
    assert record.exception_message == "disk full"
    assert record.stack_trace is not None
    assert "RuntimeError: disk full" in record.stack_trace


async def test_report_braces_without_args_are_literal(
    memory_store: InMemoryErrorStore,
) -> None:
    """A description without arguments is stored unformatted."""
    reporter = ErrorReporter(memory_store)

    error_id = await reporter.report("Bad payload {'a': 1}")

    record = await memory_store.get_by_id(error_id)  # type: ignore[arg-type]
    assert record is not None
    assert record.description == "Bad payload {'a': 1}"


async def test_report_returns_none_when_store_fails(
    memory_store: InMemoryErrorStore,
) -> None:
    """A broken store does not make reporting raise."""
    memory_store.insert_or_increment = AsyncMock(  # type: ignore[method-assign]
        side_effect=RuntimeError("database down")
    )
    reporter = ErrorReporter(memory_store)

    assert await reporter.report("Boom") is None


@pytest.mark.parametrize(
    ("description", "args", "expected"),
    [
        ("Bad payload {json} for {0}", ("x",), "Bad payload {json} for {0} x"),
        ("a {} b {}", ("only-one",), "a {} b {} only-one"),
        ("Unclosed {", (1, 2), "Unclosed { 1 2"),
        ("Missing {0.name}", (3,), "Missing {0.name} 3"),
    ],
)
async def test_report_keeps_malformed_template(
    memory_store: InMemoryErrorStore,
    description: str,
    args: tuple[object, ...],
    expected: str,
) -> None:
    """A template that does not fit its arguments is still recorded."""
    reporter = ErrorReporter(memory_store)

    error_id = await reporter.report(description, *args)

    assert error_id is not None
    record = await memory_store.get_by_id(error_id)
    assert record is not None
    assert record.description == expected
