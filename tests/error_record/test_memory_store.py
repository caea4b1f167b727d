# ruff: noqa: S101

"""Tests specific to the in-memory error store."""

import pytest

from apperrors.error_record import InMemoryErrorStore

pytestmark = [pytest.mark.asyncio, pytest.mark.error_record]


async def test_returns_copies(memory_store: InMemoryErrorStore) -> None:
    """Changing a returned record does not change the stored one."""
    error_id = await memory_store.insert(memory_store.new_error("Boom"))

    record = await memory_store.get_by_id(error_id)
    assert record is not None
    record.description = "Changed"
    record.resolved = True

    stored = await memory_store.get_by_id(error_id)
    assert stored is not None
    assert stored.description == "Boom"
    assert stored.resolved is False


async def test_insert_does_not_touch_argument(
    memory_store: InMemoryErrorStore,
) -> None:
    """The record given to insert stays unsaved."""
    record = memory_store.new_error("Boom")

    await memory_store.insert(record)

    assert record.id is None


async def test_ids_increase(memory_store: InMemoryErrorStore) -> None:
    """Ids are assigned in insertion order."""
    first = await memory_store.insert(memory_store.new_error("a"))
    second = await memory_store.insert(memory_store.new_error("b"))

    assert second == first + 1
