import uuid

import pytest
from httpx import AsyncClient

from ark.api.v1.endpoints.assets import get_asset_service
from ark.core.config import settings
from ark.core.errors import RepositoryError
from ark.main import app

ASSETS = f"{settings.API_V1_PREFIX}/assets"


async def _create(client: AsyncClient, headers, **payload):
    payload.setdefault("name", "web-01")
    response = await client.post(ASSETS, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


# ── Auth ────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_requires_bearer_token(client: AsyncClient):
    response = await client.get(ASSETS)
    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "Missing authorization header",
        "code": "UNAUTHORIZED",
    }


@pytest.mark.asyncio
async def test_rejects_invalid_token(client: AsyncClient):
    response = await client.get(ASSETS, headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid or expired token"


# ── CRUD ────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_create_and_get_asset(client: AsyncClient, alice_headers):
    created = await _create(
        client, alice_headers, name="pve-01", type="server", hostname="pve.lan", metadata={"cores": 16}
    )
    assert created["user_id"] == "alice"
    assert created["metadata"] == {"cores": 16}
    uuid.UUID(created["id"])

    response = await client.get(f"{ASSETS}/{created['id']}", headers=alice_headers)
    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
async def test_null_fields_are_omitted_but_empty_metadata_is_kept(client: AsyncClient, alice_headers):
    bare = await _create(client, alice_headers, name="bare")
    assert "type" not in bare
    assert "hostname" not in bare
    assert "metadata" not in bare

    empty = await _create(client, alice_headers, name="empty", metadata={})
    assert empty["metadata"] == {}


@pytest.mark.asyncio
async def test_patch_is_partial(client: AsyncClient, alice_headers):
    created = await _create(client, alice_headers, name="router", type="network", hostname="old.host")

    response = await client.patch(f"{ASSETS}/{created['id']}", json={"name": "router-2"}, headers=alice_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "router-2"
    assert body["type"] == "network"
    assert body["hostname"] == "old.host"

    response = await client.patch(f"{ASSETS}/{created['id']}", json={"hostname": ""}, headers=alice_headers)
    assert response.json()["hostname"] == ""
    assert response.json()["name"] == "router-2"


@pytest.mark.asyncio
async def test_delete_asset(client: AsyncClient, alice_headers):
    created = await _create(client, alice_headers)
    response = await client.delete(f"{ASSETS}/{created['id']}", headers=alice_headers)
    assert response.status_code == 204
    assert response.content == b""

    response = await client.get(f"{ASSETS}/{created['id']}", headers=alice_headers)
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "asset not found", "code": "NOT_FOUND"}


@pytest.mark.asyncio
async def test_other_tenant_gets_404_everywhere(client: AsyncClient, alice_headers, bob_headers):
    created = await _create(client, alice_headers, name="alice-only")
    url = f"{ASSETS}/{created['id']}"

    assert (await client.get(url, headers=bob_headers)).status_code == 404
    assert (await client.patch(url, json={"name": "bob"}, headers=bob_headers)).status_code == 404
    assert (await client.delete(url, headers=bob_headers)).status_code == 404

    listing = await client.get(ASSETS, headers=bob_headers)
    assert listing.json()["assets"] == []
    assert (await client.get(url, headers=alice_headers)).json()["name"] == "alice-only"


# ── Validation ──────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_missing_name_is_a_field_error(client: AsyncClient, alice_headers):
    response = await client.post(ASSETS, json={"type": "vm"}, headers=alice_headers)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "VALIDATION_ERROR"
    assert body["error"] == "Validation failed"
    assert {"field": "name", "error": "is required"} in body["field_errors"]


@pytest.mark.asyncio
async def test_name_too_long(client: AsyncClient, alice_headers):
    response = await client.post(ASSETS, json={"name": "x" * 101}, headers=alice_headers)
    assert response.status_code == 400
    assert response.json()["field_errors"] == [
        {"field": "name", "error": "must not exceed 100 characters"}
    ]


@pytest.mark.asyncio
async def test_invalid_type_is_bad_request(client: AsyncClient, alice_headers):
    response = await client.post(ASSETS, json={"name": "x", "type": "toaster"}, headers=alice_headers)
    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "invalid asset type: toaster",
        "code": "BAD_REQUEST",
    }


@pytest.mark.asyncio
async def test_metadata_must_be_object(client: AsyncClient, alice_headers):
    response = await client.post(ASSETS, json={"name": "x", "metadata": [1, 2]}, headers=alice_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "metadata must be a JSON object"


@pytest.mark.asyncio
async def test_malformed_uuid_is_400(client: AsyncClient, alice_headers):
    response = await client.get(f"{ASSETS}/not-a-uuid", headers=alice_headers)
    assert response.status_code == 400
    assert response.json()["field_errors"] == [{"field": "asset_id", "error": "must be a valid UUID"}]


# ── Listing ─────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_list_pagination_envelope(client: AsyncClient, alice_headers):
    for i in range(5):
        await _create(client, alice_headers, name=f"node-{i}")

    response = await client.get(
        ASSETS,
        params={"limit": 2, "offset": 2, "sort_by": "name", "sort_order": "asc"},
        headers=alice_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert [a["name"] for a in body["assets"]] == ["node-2", "node-3"]
    assert body["total"] == 5
    assert (body["limit"], body["offset"]) == (2, 2)
    assert body["has_next"] is True
    assert body["has_prev"] is True


@pytest.mark.asyncio
async def test_list_limit_is_clamped(client: AsyncClient, alice_headers):
    response = await client.get(ASSETS, params={"limit": 1000}, headers=alice_headers)
    assert response.json()["limit"] == 100


@pytest.mark.asyncio
async def test_list_filters_by_type_and_search(client: AsyncClient, alice_headers):
    await _create(client, alice_headers, name="truenas", type="nas", hostname="tank.lan")
    await _create(client, alice_headers, name="pihole", type="container", hostname="dns.lan")

    by_type = await client.get(ASSETS, params={"type": "nas"}, headers=alice_headers)
    assert [a["name"] for a in by_type.json()["assets"]] == ["truenas"]

    by_host = await client.get(ASSETS, params={"search": "DNS"}, headers=alice_headers)
    assert [a["name"] for a in by_host.json()["assets"]] == ["pihole"]


@pytest.mark.asyncio
async def test_list_rejects_unknown_sort(client: AsyncClient, alice_headers):
    response = await client.get(
        ASSETS, params={"sort_by": "name; DROP TABLE assets"}, headers=alice_headers
    )
    assert response.status_code == 400
    assert response.json()["code"] == "BAD_REQUEST"
    assert response.json()["error"].startswith("invalid sort_by")

    response = await client.get(ASSETS, params={"sort_order": "sideways"}, headers=alice_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_malformed_json_body_reports_body_field(client: AsyncClient, alice_headers):
    response = await client.post(
        ASSETS,
        content=b'{"name": "web-01", ',
        headers={**alice_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["field_errors"] == [{"field": "body", "error": "must be valid JSON"}]


# ── Internal errors ─────────────────────────────────────────────────────

class _BrokenAssetService:
    async def list(self, user_id, params):
        raise RepositoryError("list assets: connection to 10.0.0.5:5432 refused")


@pytest.mark.asyncio
async def test_repository_error_is_500_without_details(client: AsyncClient, alice_headers):
    app.dependency_overrides[get_asset_service] = lambda: _BrokenAssetService()

    response = await client.get(ASSETS, headers=alice_headers)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "An internal error occurred.",
        "code": "INTERNAL_ERROR",
    }
    assert "10.0.0.5" not in response.text
