"""Section backfill migration tests."""

import pytest

from taskboard.models import Account, Board, Tenant
from taskboard.models.board import DEFAULT_SECTIONS
from taskboard.storage.migrations import backfill_board_sections
from taskboard.storage import repositories as repo


async def _seed_boards(db):
    db.add(Tenant(tenant_id="t1", name="Acme Company", domain="acme.com"))
    db.add(
        Account(
            account_id="a1",
            tenant_id="t1",
            name="Alice",
            email="alice@acme.com",
            password_hash="x",
            role="admin",
        )
    )
    await db.flush()
    db.add(Board(board_id="old", tenant_id="t1", owner_account_id="a1", name="Old", sections=[]))
    db.add(
        Board(
            board_id="new",
            tenant_id="t1",
            owner_account_id="a1",
            name="New",
            sections=[{"id": "only", "name": "Only", "order": 0}],
        )
    )
    await db.commit()


@pytest.mark.asyncio
async def test_backfill_is_idempotent(db_session):
    await _seed_boards(db_session)

    assert await backfill_board_sections(db_session) == 1
    await db_session.commit()
    assert await backfill_board_sections(db_session) == 0

    old = await repo.get_board(db_session, "old")
    new = await repo.get_board(db_session, "new")
    assert old.sections == DEFAULT_SECTIONS
    assert old.version == 2
    assert new.section_ids() == ["only"]
