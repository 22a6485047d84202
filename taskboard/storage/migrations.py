"""Explicit data migrations, run once at deploy time rather than on read."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.models import Board
from taskboard.models.board import default_sections
from taskboard.storage.repositories import touch_board

logger = logging.getLogger(__name__)


async def backfill_board_sections(db: AsyncSession) -> int:
    """Give every board without sections the default workflow.

    Idempotent: boards that already have sections are left untouched.
    Returns the number of boards changed.
    """
    result = await db.execute(select(Board))
    changed = 0
    for board in result.scalars().all():
        if board.sections:
            continue
        board.sections = default_sections()
        touch_board(board)
        changed += 1
        logger.info("Backfilled default sections on board %s", board.board_id)
    await db.flush()
    return changed
