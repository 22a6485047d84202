"""Board and section API tests."""

import pytest
from httpx import AsyncClient

from taskboard.storage import repositories as repo


@pytest.mark.asyncio
async def test_create_board_with_default_sections(client: AsyncClient, acme, create_board):
    board = await create_board(acme["admin"]["headers"], name="Launch", description="Q3")
    assert board["name"] == "Launch"
    assert board["owner_id"] == acme["admin"]["user"]["id"]
    assert [s["id"] for s in board["sections"]] == ["todo", "in-progress", "testing", "done"]
    assert [s["name"] for s in board["sections"]] == ["To Do", "In Progress", "Testing", "Done"]
    assert board["version"] == 1


@pytest.mark.asyncio
async def test_create_board_custom_sections(acme, create_board):
    board = await create_board(acme["admin"]["headers"], sections=["Backlog", "Shipped"])
    assert [s["id"] for s in board["sections"]] == ["backlog", "shipped"]


@pytest.mark.asyncio
async def test_only_admins_create_boards(client: AsyncClient, acme):
    resp = await client.post("/api/boards", json={"name": "Mine"}, headers=acme["bob"]["headers"])
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_create_board_requires_name(client: AsyncClient, acme):
    resp = await client.post("/api/boards", json={"name": "  "}, headers=acme["admin"]["headers"])
    assert resp.status_code == 400
    assert resp.json() == {"error": "Board name is required"}


@pytest.mark.asyncio
async def test_board_visibility(client: AsyncClient, acme, create_board, create_task):
    """Boards are visible to owner, listed assignees and holders of assigned tasks."""
    admin = acme["admin"]["headers"]
    listed = await create_board(admin, name="Listed", assignees=["Bob Builder"])
    via_task = await create_board(admin, name="Via task")
    hidden = await create_board(admin, name="Hidden")
    await create_task(admin, via_task["id"], title="For Carol", assignee="Carol Clerk")

    resp = await client.get("/api/boards", headers=acme["bob"]["headers"])
    assert [b["id"] for b in resp.json()] == [listed["id"]]

    resp = await client.get("/api/boards", headers=acme["carol"]["headers"])
    assert [b["id"] for b in resp.json()] == [via_task["id"]]

    resp = await client.get("/api/boards", headers=admin)
    assert [b["id"] for b in resp.json()] == [hidden["id"], via_task["id"], listed["id"]]

    assert (await client.get(f"/api/boards/{listed['id']}", headers=acme["bob"]["headers"])).status_code == 200
    assert (await client.get(f"/api/boards/{via_task['id']}", headers=acme["carol"]["headers"])).status_code == 200
    resp = await client.get(f"/api/boards/{hidden['id']}", headers=acme["bob"]["headers"])
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_cross_tenant_board_is_not_found(client: AsyncClient, acme, register, create_board):
    board = await create_board(acme["admin"]["headers"])
    outsider = await register("Olga", "olga@other.com")
    resp = await client.get(f"/api/boards/{board['id']}", headers=outsider["headers"])
    assert resp.status_code == 404
    resp = await client.get(f"/api/tasks/{board['id']}", headers=outsider["headers"])
    assert resp.status_code == 404
    resp = await client.get("/api/boards", headers=outsider["headers"])
    assert resp.json() == []


@pytest.mark.asyncio
async def test_update_board_owner_only(client: AsyncClient, acme, create_board):
    admin = acme["admin"]
    board = await create_board(admin["headers"])
    # Second admin is not the creator
    await client.post(
        f"/api/auth/promote-user/{acme['bob']['user']['id']}", headers=admin["headers"]
    )
    resp = await client.put(
        f"/api/boards/{board['id']}", json={"name": "Hijacked"}, headers=acme["bob"]["headers"]
    )
    assert resp.status_code == 403

    resp = await client.put(
        f"/api/boards/{board['id']}",
        json={"name": "Renamed", "assignees": "Carol Clerk"},
        headers=admin["headers"],
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Renamed"
    assert data["assignees"] == ["Carol Clerk"]
    assert data["version"] == 2


@pytest.mark.asyncio
async def test_update_board_noop_keeps_version(client: AsyncClient, acme, create_board):
    board = await create_board(acme["admin"]["headers"], name="Same")
    resp = await client.put(
        f"/api/boards/{board['id']}", json={"name": "Same"}, headers=acme["admin"]["headers"]
    )
    assert resp.status_code == 200
    assert resp.json()["version"] == 1


@pytest.mark.asyncio
async def test_delete_board_cascades(client: AsyncClient, acme, create_board, create_task, db_session):
    admin = acme["admin"]["headers"]
    board = await create_board(admin)
    task = await create_task(admin, board["id"])

    resp = await client.delete(f"/api/boards/{board['id']}", headers=admin)
    assert resp.status_code == 200

    assert (await client.get(f"/api/boards/{board['id']}", headers=admin)).status_code == 404
    assert (await client.get(f"/api/tasks/{board['id']}", headers=admin)).status_code == 404
    assert (await client.get(f"/api/tasks/{task['id']}/activity", headers=admin)).status_code == 404
    assert await repo.list_board_tasks(db_session, board["id"], board["company_id"]) == []


@pytest.mark.asyncio
async def test_delete_board_forbidden_for_non_owner(client: AsyncClient, acme, create_board):
    board = await create_board(acme["admin"]["headers"], assignees=["Bob Builder"])
    resp = await client.delete(f"/api/boards/{board['id']}", headers=acme["bob"]["headers"])
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_section_lifecycle(client: AsyncClient, acme, create_board):
    headers = acme["admin"]["headers"]
    board = await create_board(headers)
    base = f"/api/boards/{board['id']}/sections"

    resp = await client.post(base, json={"name": "Code Review"}, headers=headers)
    assert resp.status_code == 201
    data = resp.json()
    assert data["sections"][-1] == {"id": "code-review", "name": "Code Review", "order": 4}

    resp = await client.put(f"{base}/code-review", json={"name": "Review"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["sections"][-1]["name"] == "Review"

    resp = await client.put(
        f"{base}/reorder",
        json={"section_ids": ["code-review", "todo", "in-progress", "testing", "done"]},
        headers=headers,
    )
    assert resp.status_code == 200
    assert [s["id"] for s in resp.json()["sections"]][:2] == ["code-review", "todo"]

    resp = await client.delete(f"{base}/testing", headers=headers)
    assert resp.status_code == 200
    ids = [s["id"] for s in resp.json()["sections"]]
    assert "testing" not in ids
    assert len(ids) == 4


@pytest.mark.asyncio
async def test_section_in_use_cannot_be_deleted(client: AsyncClient, acme, create_board, create_task):
    headers = acme["admin"]["headers"]
    board = await create_board(headers)
    await create_task(headers, board["id"], title="One", status="testing")
    await create_task(headers, board["id"], title="Two", status="testing")

    resp = await client.delete(f"/api/boards/{board['id']}/sections/testing", headers=headers)
    assert resp.status_code == 400
    assert "2 task(s)" in resp.json()["error"]

    resp = await client.get(f"/api/boards/{board['id']}", headers=headers)
    assert "testing" in [s["id"] for s in resp.json()["sections"]]
    resp = await client.get(f"/api/tasks/{board['id']}", headers=headers)
    assert {t["status"] for t in resp.json()} == {"testing"}


@pytest.mark.asyncio
async def test_sections_require_manage_rights(client: AsyncClient, acme, create_board):
    board = await create_board(acme["admin"]["headers"], assignees=["Bob Builder"])
    resp = await client.post(
        f"/api/boards/{board['id']}/sections",
        json={"name": "Mine"},
        headers=acme["bob"]["headers"],
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_stale_version_rejected(client: AsyncClient, acme, create_board):
    headers = acme["admin"]["headers"]
    board = await create_board(headers)
    base = f"/api/boards/{board['id']}/sections"

    resp = await client.post(base, json={"name": "A", "expected_version": 1}, headers=headers)
    assert resp.status_code == 201
    assert resp.json()["version"] == 2

    resp = await client.post(base, json={"name": "B", "expected_version": 1}, headers=headers)
    assert resp.status_code == 400
    resp = await client.delete(f"{base}/a?expected_version=1", headers=headers)
    assert resp.status_code == 400
