#!/usr/bin/env python3
"""Give an account the admin role. Run: python scripts/set_admin.py <email>"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from taskboard.database import async_session_maker
from taskboard.models import Role
from taskboard.storage import repositories as repo


async def main(email: str) -> int:
    async with async_session_maker() as session:
        account = await repo.get_account_by_email(session, email)
        if not account:
            print(f"User not found: {email}")
            return 1
        if account.is_admin:
            print(f"{account.email} is already an admin.")
            return 0
        account.role = Role.ADMIN.value
        await session.commit()
    print(f"{account.name} ({account.email}) is now an admin.")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python scripts/set_admin.py <email>")
        sys.exit(1)
    sys.exit(asyncio.run(main(sys.argv[1])))
