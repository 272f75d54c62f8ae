"""End-to-end tests for the /resources HTTP surface."""

from __future__ import annotations

from uuid import uuid4

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration


@pytest.fixture
def resources_url(api_prefix: str) -> str:
    return f"{api_prefix}/resources"


async def _create(client: AsyncClient, url: str, **payload) -> dict:
    response = await client.post(url, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_returns_201_with_location_and_no_tags(
    client: AsyncClient, resources_url: str
) -> None:
    response = await client.post(
        resources_url, json={"name": "N", "description": "D", "tags": ["react"]}
    )

    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"id", "name", "description", "created_at"}
    assert body["name"] == "N"
    assert response.headers["location"].endswith(f"{resources_url}/{body['id']}")

    fetched = await client.get(f"{resources_url}/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "N"
    assert fetched.json()["description"] == "D"


async def test_created_at_survives_round_trip(client: AsyncClient, resources_url: str) -> None:
    created = await _create(client, resources_url, name="N")

    fetched = await client.get(f"{resources_url}/{created['id']}")
    listed = await client.get(resources_url)

    assert created["created_at"].endswith("Z")
    assert fetched.json()["created_at"] == created["created_at"]
    assert listed.json()[0]["created_at"] == created["created_at"]


async def test_description_is_null_not_missing(client: AsyncClient, resources_url: str) -> None:
    body = await _create(client, resources_url, name="N")

    assert body["description"] is None


async def test_expand_tags_returns_reconciled_tag(
    client: AsyncClient, resources_url: str
) -> None:
    created = await _create(client, resources_url, name="N", tags=["react"])

    response = await client.get(f"{resources_url}/{created['id']}", params={"expand": "TAGS"})

    tags = response.json()["tags"]
    assert len(tags) == 1
    assert tags[0]["label"] == "react"
    assert set(tags[0]) == {"id", "label"}


async def test_same_label_shares_tag_id(client: AsyncClient, resources_url: str) -> None:
    a = await _create(client, resources_url, name="A", tags=["x"])
    b = await _create(client, resources_url, name="B", tags=["x"])

    tag_a = (await client.get(f"{resources_url}/{a['id']}?expand=tags")).json()["tags"][0]
    tag_b = (await client.get(f"{resources_url}/{b['id']}?expand=tags")).json()["tags"][0]

    assert tag_a["id"] == tag_b["id"]


async def test_expanded_untagged_resource_has_empty_list(
    client: AsyncClient, resources_url: str
) -> None:
    created = await _create(client, resources_url, name="N")

    expanded = await client.get(f"{resources_url}/{created['id']}?expand=tags")
    plain = await client.get(f"{resources_url}/{created['id']}?expand=owner")

    assert expanded.json()["tags"] == []
    assert "tags" not in plain.json()


async def test_list_is_newest_first_and_shaped_by_expand(
    client: AsyncClient, resources_url: str
) -> None:
    await _create(client, resources_url, name="first", tags=["a"])
    await _create(client, resources_url, name="second")

    plain = (await client.get(resources_url)).json()
    expanded = (await client.get(resources_url, params={"expand": "tags"})).json()

    assert [r["name"] for r in plain] == ["second", "first"]
    assert all("tags" not in r for r in plain)
    assert [[t["label"] for t in r["tags"]] for r in expanded] == [[], ["a"]]


async def test_list_filter_is_logical_or(client: AsyncClient, resources_url: str) -> None:
    await _create(client, resources_url, name="has-a", tags=["a"])
    await _create(client, resources_url, name="has-b", tags=["b"])
    await _create(client, resources_url, name="has-c", tags=["c"])
    await _create(client, resources_url, name="none")

    response = await client.get(resources_url, params={"tags": "a,,b "})

    assert sorted(r["name"] for r in response.json()) == ["has-a", "has-b"]


async def test_list_filter_unknown_label_is_empty(
    client: AsyncClient, resources_url: str
) -> None:
    await _create(client, resources_url, name="has-a", tags=["a"])

    response = await client.get(resources_url, params={"tags": "nope"})

    assert response.status_code == 200
    assert response.json() == []


async def test_empty_filter_returns_all(client: AsyncClient, resources_url: str) -> None:
    await _create(client, resources_url, name="one", tags=["a"])
    await _create(client, resources_url, name="two")

    response = await client.get(resources_url, params={"tags": " , "})

    assert len(response.json()) == 2


async def test_update_tag_states(client: AsyncClient, resources_url: str) -> None:
    created = await _create(client, resources_url, name="N", tags=["old"])
    url = f"{resources_url}/{created['id']}"

    async def labels() -> list[str]:
        return [t["label"] for t in (await client.get(f"{url}?expand=tags")).json()["tags"]]

    absent = await client.put(url, json={"name": "Renamed"})
    assert absent.status_code == 200
    assert absent.json()["name"] == "Renamed"
    assert "tags" not in absent.json()
    assert await labels() == ["old"]

    replaced = await client.put(url, json={"name": "Renamed", "tags": ["b", "a"]})
    assert replaced.status_code == 200
    assert await labels() == ["a", "b"]

    cleared = await client.put(url, json={"name": "Renamed", "tags": []})
    assert cleared.status_code == 200
    assert await labels() == []


async def test_update_missing_resource_is_404_and_creates_nothing(
    client: AsyncClient, resources_url: str
) -> None:
    response = await client.put(f"{resources_url}/{uuid4()}", json={"name": "N"})

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["type"] == "resource-not-found"
    assert (await client.get(resources_url)).json() == []


async def test_delete_then_get_is_404(client: AsyncClient, resources_url: str) -> None:
    created = await _create(client, resources_url, name="N", tags=["keep"])
    url = f"{resources_url}/{created['id']}"

    deleted = await client.delete(url)
    assert deleted.status_code == 204
    assert deleted.content == b""

    assert (await client.get(url)).status_code == 404
    assert (await client.delete(url)).status_code == 404

    # The tag survives and is reused
    other = await _create(client, resources_url, name="M", tags=["keep"])
    assert (await client.get(f"{resources_url}/{other['id']}?expand=tags")).json()["tags"][0][
        "label"
    ] == "keep"


@pytest.mark.parametrize(
    ("method", "body"),
    [
        ("GET", None),
        ("PUT", {"name": "Renamed"}),
        ("PUT", {"name": ""}),
        ("DELETE", None),
    ],
)
async def test_malformed_id_is_not_found(
    client: AsyncClient, resources_url: str, method: str, body: dict[str, str] | None
) -> None:
    response = await client.request(method, f"{resources_url}/not-a-uuid", json=body)

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("application/problem+json")
    problem = response.json()
    assert problem["type"] == "resource-not-found"
    assert problem["resource_id"] == "not-a-uuid"


@pytest.mark.parametrize(
    ("payload", "field", "message"),
    [
        ({"name": ""}, "name", "'Name' must not be empty."),
        ({"name": "   "}, "name", "'Name' must not be empty."),
        (
            {"name": "N", "description": "d" * 2001},
            "description",
            "The length of 'Description' must be 2000 characters or fewer.",
        ),
        (
            {"name": "N", "tags": ["React", "React"]},
            "tags",
            "Duplicate tag labels are not allowed.",
        ),
        (
            {"name": "N", "tags": [f"t{i}" for i in range(11)]},
            "tags",
            "A resource can have a maximum of 10 tags.",
        ),
        ({"name": "N", "tags": ["ok", " "]}, "tags[1]", "Tag label cannot be empty or whitespace."),
        ({"name": "N", "tags": ["x" * 51]}, "tags[0]", "Tag label cannot exceed 50 characters."),
    ],
)
async def test_create_validation_failures(
    client: AsyncClient, resources_url: str, payload: dict, field: str, message: str
) -> None:
    response = await client.post(resources_url, json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["type"] == "validation-error"
    assert body["errors"] == {field: [message]}
    assert (await client.get(resources_url)).json() == []


async def test_update_validation_runs_before_lookup(
    client: AsyncClient, resources_url: str
) -> None:
    response = await client.put(f"{resources_url}/{uuid4()}", json={"name": ""})

    assert response.status_code == 400
    assert response.json()["errors"] == {"name": ["'Name' must not be empty."]}


async def test_wrong_json_type_is_400(client: AsyncClient, resources_url: str) -> None:
    response = await client.post(resources_url, json={"name": "N", "tags": "react"})

    assert response.status_code == 400
    assert "tags" in response.json()["errors"]


async def test_request_id_is_echoed(client: AsyncClient, resources_url: str) -> None:
    response = await client.get(resources_url, headers={"X-Request-ID": "req-42"})
    missing = await client.get(f"{resources_url}/{uuid4()}", headers={"X-Request-ID": "req-43"})

    assert response.headers["x-request-id"] == "req-42"
    assert missing.json()["request_id"] == "req-43"
