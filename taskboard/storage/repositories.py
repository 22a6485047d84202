"""Repository functions for tenants, accounts, boards, tasks and activity."""

from uuid import uuid4

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.models import Account, Board, Role, Task, TaskActivity, Tenant
from taskboard.models.types import utcnow


def new_id() -> str:
    return str(uuid4())


# -- tenants -----------------------------------------------------------------


async def get_tenant(db: AsyncSession, tenant_id: str | None) -> Tenant | None:
    if not tenant_id:
        return None
    return await db.get(Tenant, tenant_id)


async def get_tenant_by_domain(db: AsyncSession, domain: str) -> Tenant | None:
    result = await db.execute(select(Tenant).where(Tenant.domain == domain.lower()))
    return result.scalar_one_or_none()


async def create_tenant(db: AsyncSession, name: str, domain: str | None) -> Tenant:
    tenant = Tenant(
        tenant_id=new_id(),
        name=name,
        domain=domain.lower() if domain else None,
    )
    db.add(tenant)
    await db.flush()
    return tenant


async def list_tenants(db: AsyncSession) -> list[Tenant]:
    result = await db.execute(select(Tenant).order_by(Tenant.name))
    return list(result.scalars().all())


# -- accounts ----------------------------------------------------------------


async def get_account(db: AsyncSession, account_id: str) -> Account | None:
    return await db.get(Account, account_id)


async def get_account_by_email(db: AsyncSession, email: str) -> Account | None:
    result = await db.execute(select(Account).where(Account.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def create_account(
    db: AsyncSession,
    name: str,
    email: str,
    password_hash: str,
    tenant_id: str,
    role: Role,
) -> Account:
    account = Account(
        account_id=new_id(),
        tenant_id=tenant_id,
        name=name,
        email=email.strip().lower(),
        password_hash=password_hash,
        role=role.value,
    )
    db.add(account)
    await db.flush()
    return account


async def count_accounts(db: AsyncSession, tenant_id: str) -> int:
    result = await db.execute(
        select(func.count()).select_from(Account).where(Account.tenant_id == tenant_id)
    )
    return result.scalar_one()


async def count_admins(db: AsyncSession, tenant_id: str) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(Account)
        .where(Account.tenant_id == tenant_id, Account.role == Role.ADMIN.value)
    )
    return result.scalar_one()


async def list_tenant_accounts(db: AsyncSession, tenant_id: str) -> list[Account]:
    result = await db.execute(
        select(Account).where(Account.tenant_id == tenant_id).order_by(Account.name)
    )
    return list(result.scalars().all())


async def list_all_accounts(db: AsyncSession) -> list[Account]:
    result = await db.execute(select(Account).order_by(Account.created_at.desc()))
    return list(result.scalars().all())


# -- boards ------------------------------------------------------------------


async def get_board(db: AsyncSession, board_id: str) -> Board | None:
    return await db.get(Board, board_id)


async def list_tenant_boards(db: AsyncSession, tenant_id: str) -> list[Board]:
    result = await db.execute(
        select(Board).where(Board.tenant_id == tenant_id).order_by(Board.created_at.desc())
    )
    return list(result.scalars().all())


async def list_visible_boards(db: AsyncSession, account: Account) -> list[Board]:
    """
    Boards the account owns, is listed on, or holds an assigned task in.
    Tenant-scoped, deduplicated, newest first.
    """
    if not account.tenant_id:
        return []
    result = await db.execute(
        select(Task.board_id)
        .where(Task.tenant_id == account.tenant_id, Task.assignee == account.name)
        .distinct()
    )
    boards_with_tasks = set(result.scalars().all())

    # Assignee lists live in a JSON column; filter in Python to stay portable.
    return [
        board
        for board in await list_tenant_boards(db, account.tenant_id)
        if board.owner_account_id == account.account_id
        or account.name in (board.assignees or [])
        or board.board_id in boards_with_tasks
    ]


async def create_board(
    db: AsyncSession,
    account: Account,
    name: str,
    description: str,
    assignees: list[str],
    sections: list[dict],
) -> Board:
    board = Board(
        board_id=new_id(),
        tenant_id=account.tenant_id,
        owner_account_id=account.account_id,
        name=name,
        description=description,
        assignees=assignees,
        sections=sections,
        version=1,
    )
    db.add(board)
    await db.flush()
    return board


def touch_board(board: Board) -> None:
    """Bump the optimistic version after a write."""
    board.version = (board.version or 0) + 1
    board.updated_at = utcnow()


async def delete_board(db: AsyncSession, board: Board) -> int:
    """Delete a board and every task on it. Returns the number of tasks removed."""
    result = await db.execute(delete(Task).where(Task.board_id == board.board_id))
    await db.delete(board)
    await db.flush()
    return result.rowcount or 0


# -- tasks -------------------------------------------------------------------


async def get_task(db: AsyncSession, task_id: str) -> Task | None:
    return await db.get(Task, task_id)


async def list_board_tasks(db: AsyncSession, board_id: str, tenant_id: str) -> list[Task]:
    result = await db.execute(
        select(Task)
        .where(Task.board_id == board_id, Task.tenant_id == tenant_id)
        .order_by(Task.created_at.desc())
    )
    return list(result.scalars().all())


async def has_assigned_task(db: AsyncSession, board_id: str, name: str) -> bool:
    result = await db.execute(
        select(Task.task_id).where(Task.board_id == board_id, Task.assignee == name).limit(1)
    )
    return result.scalar_one_or_none() is not None


async def count_tasks_in_section(db: AsyncSession, board_id: str, section_id: str) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(Task)
        .where(Task.board_id == board_id, Task.status == section_id)
    )
    return result.scalar_one()


async def create_task(
    db: AsyncSession,
    account: Account,
    board: Board,
    title: str,
    description: str,
    status: str,
    priority: str,
    assignee: str,
) -> Task:
    task = Task(
        task_id=new_id(),
        board_id=board.board_id,
        tenant_id=board.tenant_id,
        owner_account_id=account.account_id,
        title=title,
        description=description,
        status=status,
        priority=priority,
        assignee=assignee,
    )
    db.add(task)
    await db.flush()
    return task


# -- activity ----------------------------------------------------------------


async def record_activity(
    db: AsyncSession,
    task_id: str,
    actor: Account,
    action: str,
    field: str = "all",
    old_value: str = "",
    new_value: str = "",
) -> TaskActivity:
    """Append one activity record."""
    activity = TaskActivity(
        activity_id=new_id(),
        task_id=task_id,
        actor_account_id=actor.account_id,
        actor_name=actor.name,
        action=action,
        field=field,
        old_value=old_value or "",
        new_value=new_value or "",
        created_at=utcnow(),
    )
    db.add(activity)
    await db.flush()
    return activity


async def list_activity(db: AsyncSession, task_id: str, limit: int = 100) -> list[TaskActivity]:
    result = await db.execute(
        select(TaskActivity)
        .where(TaskActivity.task_id == task_id)
        .order_by(TaskActivity.created_at.desc())
        .limit(limit)
    )
    return list(result.scalars().all())
