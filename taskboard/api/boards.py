"""Board endpoints - boards and their workflow sections."""

import logging

from fastapi import APIRouter, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.auth.middleware import AccountDep, DbDep
from taskboard.engine import sections as section_ops
from taskboard.engine.policy import policy
from taskboard.errors import ForbiddenError, NotFoundError, ValidationError
from taskboard.models import Account, Board
from taskboard.schemas.board import (
    BoardOut,
    CreateBoardRequest,
    MessageResponse,
    ReorderSectionsRequest,
    SectionOut,
    SectionRequest,
    UpdateBoardRequest,
)
from taskboard.storage import repositories as repo

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_NAME = 100
MAX_DESCRIPTION = 500


async def get_tenant_board(db: AsyncSession, account: Account, board_id: str) -> Board:
    """Board in the caller's tenant. Other tenants' boards look missing."""
    board = await repo.get_board(db, board_id)
    if not board or not policy.same_tenant(account, board):
        raise NotFoundError("Board not found")
    return board


async def get_readable_board(db: AsyncSession, account: Account, board_id: str) -> Board:
    board = await get_tenant_board(db, account, board_id)
    assigned = await repo.has_assigned_task(db, board.board_id, account.name)
    if not policy.can_read_board(account, board, assigned):
        raise ForbiddenError("Access denied. You are not assigned to this board.")
    return board


def _clean_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Board name is required")
    if len(name) > MAX_NAME:
        raise ValidationError(f"Board name cannot exceed {MAX_NAME} characters")
    return name


def _clean_description(description: str | None) -> str:
    description = (description or "").strip()
    if len(description) > MAX_DESCRIPTION:
        raise ValidationError(f"Description cannot exceed {MAX_DESCRIPTION} characters")
    return description


def _clean_assignees(assignees: list[str] | None) -> list[str]:
    seen: list[str] = []
    for name in assignees or []:
        name = name.strip()
        if name and name not in seen:
            seen.append(name)
    return seen


@router.get("", response_model=list[BoardOut])
async def list_boards(account: AccountDep, db: DbDep):
    """Boards the caller owns, is assigned to, or has tasks on."""
    return await repo.list_visible_boards(db, account)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=BoardOut)
async def create_board(body: CreateBoardRequest, account: AccountDep, db: DbDep):
    """Create a board. Without custom sections it gets the default workflow."""
    if not policy.can_create_board(account):
        raise ForbiddenError("Only admins can create boards")
    board = await repo.create_board(
        db,
        account,
        name=_clean_name(body.name),
        description=_clean_description(body.description),
        assignees=_clean_assignees(body.assignees),
        sections=section_ops.build_initial_sections(body.sections),
    )
    await db.commit()
    logger.info("Board %s created by %s", board.board_id, account.email)
    return board


@router.get("/{board_id}", response_model=BoardOut)
async def get_board(board_id: str, account: AccountDep, db: DbDep):
    return await get_readable_board(db, account, board_id)


@router.put("/{board_id}", response_model=BoardOut)
async def update_board(board_id: str, body: UpdateBoardRequest, account: AccountDep, db: DbDep):
    """Edit board metadata. Creator only."""
    board = await get_tenant_board(db, account, board_id)
    if not policy.can_write_board(account, board):
        raise ForbiddenError(
            "You do not have permission to edit this board. Only the board creator can edit it."
        )
    section_ops.check_version(board, body.expected_version)

    changed = False
    if body.name is not None:
        name = _clean_name(body.name)
        if name != board.name:
            board.name = name
            changed = True
    if body.description is not None:
        description = _clean_description(body.description)
        if description != board.description:
            board.description = description
            changed = True
    if body.assignees is not None:
        assignees = _clean_assignees(body.assignees)
        if assignees != list(board.assignees or []):
            board.assignees = assignees
            changed = True

    if changed:
        repo.touch_board(board)
        await db.commit()
    return board


@router.delete("/{board_id}", response_model=MessageResponse)
async def delete_board(board_id: str, account: AccountDep, db: DbDep):
    """Delete a board and all of its tasks. Creator only; irreversible."""
    board = await get_tenant_board(db, account, board_id)
    if not policy.can_write_board(account, board):
        raise ForbiddenError(
            "You do not have permission to delete this board. "
            "Only the board creator can delete it."
        )
    removed = await repo.delete_board(db, board)
    await db.commit()
    logger.info("Board %s deleted by %s with %d task(s)", board_id, account.email, removed)
    return MessageResponse(message="Board and associated tasks deleted successfully")


# -- sections ----------------------------------------------------------------


async def _manageable_board(db: AsyncSession, account: Account, board_id: str) -> Board:
    board = await get_tenant_board(db, account, board_id)
    if not policy.can_manage_sections(account, board):
        raise ForbiddenError("Only admins can manage board sections")
    return board


async def _save_sections(db: AsyncSession, board: Board, sections: list[dict]) -> None:
    board.sections = sections
    repo.touch_board(board)
    await db.commit()


@router.post(
    "/{board_id}/sections", status_code=status.HTTP_201_CREATED, response_model=BoardOut
)
async def add_section(board_id: str, body: SectionRequest, account: AccountDep, db: DbDep):
    """Append a section after the current last one."""
    board = await _manageable_board(db, account, board_id)
    section_ops.check_version(board, body.expected_version)
    sections, section = section_ops.add_section(board, body.name)
    await _save_sections(db, board, sections)
    logger.info("Section %s added to board %s", section["id"], board_id)
    return board


@router.put("/{board_id}/sections/reorder", response_model=BoardOut)
async def reorder_sections(
    board_id: str, body: ReorderSectionsRequest, account: AccountDep, db: DbDep
):
    """Rewrite section order from the given id sequence in one update."""
    board = await _manageable_board(db, account, board_id)
    section_ops.check_version(board, body.expected_version)
    await _save_sections(db, board, section_ops.reorder_sections(board, body.section_ids))
    return board


@router.put("/{board_id}/sections/{section_id}", response_model=BoardOut)
async def rename_section(
    board_id: str, section_id: str, body: SectionRequest, account: AccountDep, db: DbDep
):
    board = await _manageable_board(db, account, board_id)
    section_ops.check_version(board, body.expected_version)
    await _save_sections(db, board, section_ops.rename_section(board, section_id, body.name))
    return board


@router.delete("/{board_id}/sections/{section_id}", response_model=BoardOut)
async def delete_section(
    board_id: str,
    section_id: str,
    account: AccountDep,
    db: DbDep,
    expected_version: int | None = None,
):
    """Remove an unused section. Sections still holding tasks cannot be deleted."""
    board = await _manageable_board(db, account, board_id)
    section_ops.check_version(board, expected_version)
    in_use = await repo.count_tasks_in_section(db, board.board_id, section_id)
    policy.ensure_section_deletable(board, section_id, in_use)
    await _save_sections(db, board, section_ops.remove_section(board, section_id))
    logger.info("Section %s removed from board %s", section_id, board_id)
    return board


@router.get("/{board_id}/sections", response_model=list[SectionOut])
async def list_sections(board_id: str, account: AccountDep, db: DbDep):
    board = await get_readable_board(db, account, board_id)
    return board.ordered_sections()
