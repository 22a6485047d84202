#!/usr/bin/env python3
"""
Seed script: creates a demo tenant, its admin account and a board with a few tasks.
Run after migrations: python scripts/seed.py
"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from taskboard.auth.security import hash_password
from taskboard.database import async_session_maker
from taskboard.models import Role
from taskboard.models.board import default_sections
from taskboard.storage import repositories as repo
from taskboard.utils.domains import company_name_for_domain

DEMO_DOMAIN = "demo-company.com"
DEMO_EMAIL = f"admin@{DEMO_DOMAIN}"
DEMO_PASSWORD = "demo1234"  # Demo credentials - print these for the user


async def seed():
    async with async_session_maker() as session:
        tenant = await repo.get_tenant_by_domain(session, DEMO_DOMAIN)
        if tenant:
            print("Tenant already exists, using existing.")
        else:
            tenant = await repo.create_tenant(
                session, company_name_for_domain(DEMO_DOMAIN), DEMO_DOMAIN
            )

        admin = await repo.get_account_by_email(session, DEMO_EMAIL)
        if admin:
            print("Admin already exists, skipping board creation.")
            await session.commit()
            return
        admin = await repo.create_account(
            session,
            name="Demo Admin",
            email=DEMO_EMAIL,
            password_hash=hash_password(DEMO_PASSWORD),
            tenant_id=tenant.tenant_id,
            role=Role.ADMIN,
        )

        board = await repo.create_board(
            session,
            admin,
            name="Product Launch",
            description="Demo board",
            assignees=["Demo Admin"],
            sections=default_sections(),
        )
        for title, status, priority in [
            ("Write launch announcement", "todo", "high"),
            ("Set up landing page", "in-progress", "medium"),
            ("QA signup flow", "testing", "medium"),
            ("Book venue", "done", "low"),
        ]:
            task = await repo.create_task(
                session,
                admin,
                board,
                title=title,
                description="",
                status=status,
                priority=priority,
                assignee="Demo Admin",
            )
            await repo.record_activity(session, task.task_id, admin, "created", new_value=title)
        await session.commit()

    print("Seed complete!")
    print(f"Login: {DEMO_EMAIL} / {DEMO_PASSWORD}")
    print("Example: curl -X POST http://localhost:8000/api/auth/login \\")
    print('  -H "Content-Type: application/json" \\')
    print(f"  -d '{{\"email\":\"{DEMO_EMAIL}\",\"password\":\"{DEMO_PASSWORD}\"}}'")


if __name__ == "__main__":
    asyncio.run(seed())
