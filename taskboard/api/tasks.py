"""Task endpoints - task CRUD, status moves and activity history."""

import logging

from fastapi import APIRouter, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.boards import get_readable_board, get_tenant_board
from taskboard.auth.middleware import AccountDep, DbDep
from taskboard.config import settings
from taskboard.engine.policy import MAX_TITLE_LENGTH, policy
from taskboard.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from taskboard.models import Account, Priority, Task
from taskboard.models.types import utcnow
from taskboard.schemas.board import MessageResponse
from taskboard.schemas.task import ActivityOut, CreateTaskRequest, TaskOut, UpdateTaskRequest
from taskboard.storage import repositories as repo

logger = logging.getLogger(__name__)

router = APIRouter()

async def get_tenant_task(db: AsyncSession, account: Account, task_id: str) -> Task:
    task = await repo.get_task(db, task_id)
    if not task or not policy.same_tenant(account, task):
        raise NotFoundError("Task not found")
    return task


@router.get("/{board_id}", response_model=list[TaskOut])
async def list_tasks(board_id: str, account: AccountDep, db: DbDep):
    """All tasks of a board the caller can see, newest first."""
    board = await get_readable_board(db, account, board_id)
    return await repo.list_board_tasks(db, board.board_id, board.tenant_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TaskOut)
async def create_task(body: CreateTaskRequest, account: AccountDep, db: DbDep):
    """Create a task and record its ``created`` activity."""
    title = (body.title or "").strip()
    if not title:
        raise ValidationError("Task title is required")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Task title cannot exceed {MAX_TITLE_LENGTH} characters")
    if not body.board_id:
        raise ValidationError("Board ID is required")

    board = await get_tenant_board(db, account, body.board_id)
    if not policy.can_create_task(account, board):
        raise ForbiddenError("You do not have permission to create tasks in this board")

    section_ids = board.section_ids()
    if not section_ids:
        raise ConflictError("Board has no sections")
    task_status = body.status or section_ids[0]
    policy.validate_status_transition(board, task_status)
    priority = policy.validate_priority(body.priority or Priority.MEDIUM.value)

    task = await repo.create_task(
        db,
        account,
        board,
        title=title,
        description=body.description or "",
        status=task_status,
        priority=priority,
        assignee=(body.assignee or "").strip(),
    )
    await repo.record_activity(db, task.task_id, account, "created", new_value=title)
    await db.commit()
    return task


@router.put("/{task_id}", response_model=TaskOut)
async def update_task(task_id: str, body: UpdateTaskRequest, account: AccountDep, db: DbDep):
    """
    Update task fields and/or move it to another section.
    Field edits need edit rights; a status-only change needs board visibility.
    Each changed field adds one activity record.
    """
    task = await get_tenant_task(db, account, task_id)
    board = await get_tenant_board(db, account, task.board_id)
    assigned = await repo.has_assigned_task(db, board.board_id, account.name)

    plan = policy.plan_task_update(
        account, board, task, body.model_dump(), has_assigned_tasks=assigned
    )
    if plan.is_empty:
        return task

    for name, value in plan.updates.items():
        setattr(task, name, value)
    task.updated_at = utcnow()
    for change in plan.activities:
        await repo.record_activity(
            db,
            task.task_id,
            account,
            change.action,
            field=change.field,
            old_value=change.old_value,
            new_value=change.new_value,
        )
    await db.commit()
    return task


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(task_id: str, account: AccountDep, db: DbDep):
    """Delete a task. Admins may delete any task, others only their own."""
    task = await get_tenant_task(db, account, task_id)
    if not policy.can_delete_task(account, task):
        raise ForbiddenError("You do not have permission to delete this task")
    await repo.record_activity(db, task.task_id, account, "deleted", old_value=task.title)
    await db.delete(task)
    await db.commit()
    logger.info("Task %s deleted by %s", task_id, account.email)
    return MessageResponse(message="Task deleted successfully")


@router.get("/{task_id}/activity", response_model=list[ActivityOut])
async def task_activity(task_id: str, account: AccountDep, db: DbDep):
    """Most recent activity first, capped at the configured limit."""
    task = await get_tenant_task(db, account, task_id)
    board = await get_tenant_board(db, account, task.board_id)
    assigned = await repo.has_assigned_task(db, board.board_id, account.name)
    if not policy.can_read_task(account, board, task, assigned):
        raise ForbiddenError("Access denied")
    return await repo.list_activity(db, task.task_id, limit=settings.activity_limit)
