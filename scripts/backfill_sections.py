#!/usr/bin/env python3
"""
Give every board without sections the default four-stage workflow.
Safe to run more than once. Run at deploy time: python scripts/backfill_sections.py
"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from taskboard.database import async_session_maker
from taskboard.storage.migrations import backfill_board_sections


async def main():
    async with async_session_maker() as session:
        changed = await backfill_board_sections(session)
        await session.commit()
    print(f"Backfilled sections on {changed} board(s).")


if __name__ == "__main__":
    asyncio.run(main())
