#!/usr/bin/env python3
"""List every account with its role. Run: python scripts/list_users.py"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from taskboard.database import async_session_maker
from taskboard.storage import repositories as repo


async def main():
    async with async_session_maker() as session:
        accounts = await repo.list_all_accounts(session)

    if not accounts:
        print("No users found in the database.")
        return

    print(f"{'Email':<30} {'Name':<20} {'Role':<10} Created")
    print("-" * 80)
    for account in accounts:
        print(
            f"{account.email:<30} {account.name:<20} {account.role:<10} "
            f"{account.created_at:%Y-%m-%d}"
        )
    print("-" * 80)
    admins = sum(1 for a in accounts if a.is_admin)
    print(f"Total users: {len(accounts)}  Admins: {admins}  Regular users: {len(accounts) - admins}")
    print("To set a user as admin, run: python scripts/set_admin.py <email>")


if __name__ == "__main__":
    asyncio.run(main())
