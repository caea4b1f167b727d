# ruff: noqa: S101

"""Tests for the /application-errors endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from apperrors.error_record import SQLErrorStore


async def _seed(store: SQLErrorStore) -> dict[str, int]:
    ids = {
        name: await store.insert(store.new_error(name))
        for name in ("first", "second", "third")
    }
    await store.resolve(ids["second"])
    return ids


@pytest.mark.asyncio
@pytest.mark.api
class TestGetErrors:
    """Tests for paging through application errors."""

    @classmethod
    async def test_default_is_unresolved(
        cls, client: TestClient, sql_store: SQLErrorStore
    ) -> None:
        """Without a status only unresolved errors are listed."""
        ids = await _seed(sql_store)

        response = client.get("/application-errors")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["totalCount"] == 2
        assert body["pageNumber"] == 1
        assert body["pageSize"] == 25
        assert [item["id"] for item in body["items"]] == [ids["third"], ids["first"]]

    @classmethod
    async def test_items_use_camel_case(
        cls, client: TestClient, sql_store: SQLErrorStore
    ) -> None:
        """Error records are serialized with camelCase keys."""
        await _seed(sql_store)

        item = client.get("/application-errors").json()["items"][0]

        assert item["description"] == "third"
        assert item["numTimesOccurred"] == 1
        assert item["resolved"] is False
        assert item["hostName"] == "test-host"
        assert item["ipAddress"] == "10.0.0.1"
        assert item["port"] == 8080
        assert isinstance(item["createdAtMillis"], int)
        assert isinstance(item["updatedAtMillis"], int)

    @classmethod
    @pytest.mark.parametrize(
        ("query", "expected_total"),
        [
            ("status=ALL", 3),
            ("status=", 3),
            ("status=resolved", 1),
            ("status=Unresolved", 2),
        ],
    )
    async def test_status_filter(
        cls,
        client: TestClient,
        sql_store: SQLErrorStore,
        query: str,
        expected_total: int,
    ) -> None:
        """Status is case-insensitive and blank means all."""
        await _seed(sql_store)

        response = client.get(f"/application-errors?{query}")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["totalCount"] == expected_total
        assert len(body["items"]) == expected_total

    @classmethod
    async def test_paging(cls, client: TestClient, sql_store: SQLErrorStore) -> None:
        """Pages are cut from the most recently updated error on."""
        ids = await _seed(sql_store)

        body = client.get(
            "/application-errors?status=ALL&pageNumber=2&pageSize=2"
        ).json()

        assert body["totalCount"] == 3
        assert body["pageNumber"] == 2
        assert body["pageSize"] == 2
        assert [item["id"] for item in body["items"]] == [ids["first"]]

    @classmethod
    async def test_page_past_the_end_is_empty(
        cls, client: TestClient, sql_store: SQLErrorStore
    ) -> None:
        """Pages beyond the last error are empty but keep the total."""
        await _seed(sql_store)

        body = client.get("/application-errors?pageNumber=5").json()

        assert body["items"] == []
        assert body["totalCount"] == 2


@pytest.mark.asyncio
@pytest.mark.api
class TestGetErrorsInvalid:
    """Tests for rejected query parameters."""

    @classmethod
    @pytest.mark.parametrize(
        ("url", "code"),
        [
            ("/application-errors?status=OPEN", "INVALID_STATUS"),
            ("/application-errors?status=1", "INVALID_STATUS"),
            ("/application-errors?pageNumber=0", "INVALID_PAGING"),
            ("/application-errors?pageSize=0", "INVALID_PAGING"),
            ("/application-errors?pageNumber=-1&pageSize=10", "INVALID_PAGING"),
        ],
    )
    async def test_bad_request(cls, client: TestClient, url: str, code: str) -> None:
        """Unknown status values and pages below 1 are a 400."""
        response = client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["code"] == code

    @classmethod
    @pytest.mark.parametrize(
        "url",
        ["/application-errors?pageNumber=abc", "/application-errors?pageSize=1.5"],
    )
    async def test_not_a_number(cls, client: TestClient, url: str) -> None:
        """Non-numeric paging values fail request validation."""
        response = client.get(url)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT


@pytest.mark.asyncio
@pytest.mark.api
class TestGetError:
    """Tests for reading one application error."""

    @classmethod
    async def test_found(cls, client: TestClient, sql_store: SQLErrorStore) -> None:
        """An existing error is returned."""
        ids = await _seed(sql_store)

        response = client.get(f"/application-errors/{ids['second']}")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["id"] == ids["second"]
        assert body["resolved"] is True

    @classmethod
    async def test_not_found(cls, client: TestClient) -> None:
        """An unknown id is a 404."""
        response = client.get("/application-errors/999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["code"] == "NOT_FOUND"


@pytest.mark.asyncio
@pytest.mark.api
class TestResolve:
    """Tests for resolving application errors."""

    @classmethod
    async def test_resolve_one(
        cls, client: TestClient, sql_store: SQLErrorStore
    ) -> None:
        """Resolving returns the resolved error."""
        ids = await _seed(sql_store)

        response = client.put(f"/application-errors/resolve/{ids['first']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["resolved"] is True
        stored = await sql_store.get_by_id(ids["first"])
        assert stored is not None
        assert stored.resolved

    @classmethod
    async def test_resolve_unknown(cls, client: TestClient) -> None:
        """Resolving an unknown id is a 404."""
        response = client.put("/application-errors/resolve/999")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @classmethod
    async def test_resolve_all(
        cls, client: TestClient, sql_store: SQLErrorStore
    ) -> None:
        """Resolving all reports how many errors changed."""
        await _seed(sql_store)

        response = client.put("/application-errors/resolve")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"resolvedCount": 2}
        assert await sql_store.count_unresolved() == 0

        again = client.put("/application-errors/resolve")
        assert again.json() == {"resolvedCount": 0}
