"""Test timeline REST endpoints"""

import json

import pytest
from fastapi import status


async def create(client, auth_headers, **fields):
    response = await client.post("/api/timeline", json=fields, headers=auth_headers)
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
async def test_get_empty_timeline(client):
    response = await client.get("/api/timeline")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_create_item(client, auth_headers, store):
    """Test item creation persists and returns the new record"""
    data = await create(client, auth_headers, title="Opening", time="09:00", speaker="Ada")

    assert data["id"]
    assert data["title"] == "Opening"
    assert data["time"] == "09:00"
    assert data["speaker"] == "Ada"
    assert data["status"] == "upcoming"
    assert data["actual_start"] is None
    assert data["actual_end"] is None
    assert data["remarks"] == ""

    saved = json.loads(store.file_path.read_text(encoding="utf-8"))
    assert saved == [data]


@pytest.mark.asyncio
async def test_create_ignores_lifecycle_fields(client, auth_headers):
    data = await create(
        client, auth_headers, id="custom", status="live", remarks="x", title="Opening"
    )

    assert data["id"] != "custom"
    assert data["status"] == "upcoming"
    assert data["remarks"] == ""
    assert data["title"] == "Opening"


@pytest.mark.asyncio
async def test_created_items_keep_insertion_order(client, auth_headers):
    first = await create(client, auth_headers, title="First")
    second = await create(client, auth_headers, title="Second")

    response = await client.get("/api/timeline")

    assert [item["id"] for item in response.json()] == [first["id"], second["id"]]


@pytest.mark.asyncio
async def test_create_requires_admin(client):
    response = await client.post("/api/timeline", json={"title": "Opening"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_create_rejects_invalid_token(client):
    response = await client.post(
        "/api/timeline",
        json={"title": "Opening"},
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_update_item(client, auth_headers):
    item = await create(client, auth_headers, title="Opening", time="09:00")

    response = await client.put(
        f"/api/timeline/{item['id']}",
        json={"time": "09:15", "remarks": "doors open late"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == item["id"]
    assert data["title"] == "Opening"
    assert data["time"] == "09:15"
    assert data["remarks"] == "doors open late"


@pytest.mark.asyncio
async def test_update_unknown_item(client, auth_headers):
    """Test updating a non-existent item returns not found"""
    response = await client.put(
        "/api/timeline/zzz", json={"title": "Ghost"}, headers=auth_headers
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    body = response.json()
    assert body["error"] == "RESOURCE_NOT_FOUND"
    assert body["details"]["resource_id"] == "zzz"


@pytest.mark.asyncio
async def test_delete_item(client, auth_headers):
    item = await create(client, auth_headers, title="Opening")

    response = await client.delete(f"/api/timeline/{item['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert (await client.get("/api/timeline")).json() == []


@pytest.mark.asyncio
async def test_delete_unknown_item_is_acknowledged(client, auth_headers):
    response = await client.delete("/api/timeline/zzz", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}


@pytest.mark.asyncio
async def test_delete_requires_admin(client, auth_headers):
    item = await create(client, auth_headers, title="Opening")

    response = await client.delete(f"/api/timeline/{item['id']}")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
