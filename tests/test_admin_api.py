"""Account administration surface tests - shared secret and tenant admin access."""

import pytest
from httpx import AsyncClient

from tests.conftest import ADMIN_SECRET

SECRET_HEADERS = {"x-admin-secret": ADMIN_SECRET}


@pytest.mark.asyncio
async def test_verify_secret(client: AsyncClient):
    resp = await client.post("/api/admin/verify-secret", json={"adminSecret": ADMIN_SECRET})
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    resp = await client.post("/api/admin/verify-secret", json={"adminSecret": "nope"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_secret_lists_all_tenants(client: AsyncClient, acme, register):
    await register("Olga", "olga@other.com")
    resp = await client.get("/api/admin/users", headers=SECRET_HEADERS)
    assert resp.status_code == 200
    assert {u["email"] for u in resp.json()} == {
        "alice@acme.com",
        "bob@acme.com",
        "carol@acme.com",
        "olga@other.com",
    }


@pytest.mark.asyncio
async def test_tenant_admin_scope_is_own_tenant(client: AsyncClient, acme, register):
    olga = await register("Olga", "olga@other.com")
    resp = await client.get("/api/admin/users", headers=acme["admin"]["headers"])
    assert resp.status_code == 200
    assert "olga@other.com" not in {u["email"] for u in resp.json()}

    resp = await client.post(
        f"/api/admin/set-admin/{olga['user']['id']}", headers=acme["admin"]["headers"]
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_no_credentials_or_bad_credentials(client: AsyncClient, acme):
    assert (await client.get("/api/admin/users")).status_code == 401
    resp = await client.get("/api/admin/users", headers={"x-admin-secret": "wrong"})
    assert resp.status_code == 401
    resp = await client.get("/api/admin/users", headers=acme["bob"]["headers"])
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_set_and_remove_admin_with_secret(client: AsyncClient, acme):
    bob_id = acme["bob"]["user"]["id"]
    resp = await client.post(f"/api/admin/set-admin/{bob_id}", headers=SECRET_HEADERS)
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "admin"

    resp = await client.post(f"/api/admin/set-admin/{bob_id}", headers=SECRET_HEADERS)
    assert resp.status_code == 400

    resp = await client.post(f"/api/admin/remove-admin/{bob_id}", headers=SECRET_HEADERS)
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "user"


@pytest.mark.asyncio
async def test_remove_last_admin_rejected(client: AsyncClient, acme):
    admin_id = acme["admin"]["user"]["id"]
    resp = await client.post(f"/api/admin/remove-admin/{admin_id}", headers=SECRET_HEADERS)
    assert resp.status_code == 400
    resp = await client.post(
        f"/api/admin/remove-admin/{acme['carol']['user']['id']}", headers=SECRET_HEADERS
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_secret_in_body(client: AsyncClient, acme):
    resp = await client.post(
        f"/api/admin/set-admin/{acme['carol']['user']['id']}",
        json={"adminSecret": ADMIN_SECRET},
    )
    assert resp.status_code == 200
