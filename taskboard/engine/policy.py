"""Authorization and task-workflow policy.

Pure decision logic over already-loaded models. Facts that need a query
(whether the account holds an assigned task on a board, how many tasks sit in
a section) are passed in by the caller, so every rule is testable without a
database or HTTP.
"""

from dataclasses import dataclass, field
from typing import Any

from taskboard.errors import (
    ConflictError,
    ForbiddenError,
    InvalidStatus,
    NotFoundError,
    SectionInUse,
    ValidationError,
)
from taskboard.models import Account, Board, Priority, Task

PRIORITY_LABELS = {
    Priority.LOW.value: "Low",
    Priority.MEDIUM.value: "Medium",
    Priority.HIGH.value: "High",
}

EDITABLE_FIELDS = ("title", "description", "priority", "assignee")

MAX_TITLE_LENGTH = 200


@dataclass
class ActivityChange:
    """One activity record to append for a task mutation."""

    action: str
    field: str
    old_value: str
    new_value: str


@dataclass
class TaskUpdatePlan:
    """Field updates to apply to a task plus the activity they produce."""

    updates: dict[str, str] = field(default_factory=dict)
    activities: list[ActivityChange] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.updates


class Policy:
    """One method per action, each taking the acting account and the resource."""

    def same_tenant(self, account: Account, resource: Any) -> bool:
        tenant_id = getattr(resource, "tenant_id", None)
        return bool(account.tenant_id) and account.tenant_id == tenant_id

    def is_tenant_admin(self, account: Account, resource: Any) -> bool:
        return account.is_admin and self.same_tenant(account, resource)

    def can_read_board(
        self, account: Account, board: Board, has_assigned_tasks: bool = False
    ) -> bool:
        if not self.same_tenant(account, board):
            return False
        return (
            account.is_admin
            or account.account_id == board.owner_account_id
            or account.name in (board.assignees or [])
            or has_assigned_tasks
        )

    def can_write_board(self, account: Account, board: Board) -> bool:
        """Only the creator edits or deletes a board; admin role is not enough."""
        return self.same_tenant(account, board) and account.account_id == board.owner_account_id

    def can_create_board(self, account: Account) -> bool:
        return account.is_admin and bool(account.tenant_id)

    def can_manage_sections(self, account: Account, board: Board) -> bool:
        return self.is_tenant_admin(account, board) or self.can_write_board(account, board)

    def can_create_task(self, account: Account, board: Board) -> bool:
        if not self.same_tenant(account, board):
            return False
        return (
            account.is_admin
            or account.account_id == board.owner_account_id
            or account.name in (board.assignees or [])
        )

    def can_edit_task_fields(self, account: Account, task: Task) -> bool:
        if not self.same_tenant(account, task):
            return False
        return (
            account.is_admin
            or account.account_id == task.owner_account_id
            or (bool(task.assignee) and account.name == task.assignee)
        )

    def can_move_task(
        self, account: Account, board: Board, has_assigned_tasks: bool = False
    ) -> bool:
        """Anyone who can see the board may drag a card between sections."""
        return self.can_read_board(account, board, has_assigned_tasks)

    def can_delete_task(self, account: Account, task: Task) -> bool:
        if not self.same_tenant(account, task):
            return False
        return account.is_admin or account.account_id == task.owner_account_id

    def can_read_task(
        self, account: Account, board: Board, task: Task, has_assigned_tasks: bool = False
    ) -> bool:
        if not self.same_tenant(account, task):
            return False
        return (
            self.can_read_board(account, board, has_assigned_tasks)
            or account.account_id == task.owner_account_id
            or (bool(task.assignee) and account.name == task.assignee)
        )

    def ensure_admin_removable(
        self, target: Account, admins_in_tenant: int, acting: Account | None = None
    ) -> None:
        """A tenant with accounts always keeps at least one admin."""
        if acting is not None and acting.account_id == target.account_id:
            raise ConflictError("You cannot demote yourself")
        if not target.is_admin:
            raise ValidationError("User is not an admin")
        if target.tenant_id and admins_in_tenant <= 1:
            raise ConflictError(
                "Cannot demote the last admin in the company. At least one admin is required."
            )

    # -- workflow ------------------------------------------------------------

    def validate_status_transition(self, board: Board, new_status: str) -> str:
        """Any section may follow any other; the target only has to exist."""
        valid_ids = board.section_ids()
        if new_status not in valid_ids:
            raise InvalidStatus(valid_ids)
        return new_status

    def validate_priority(self, priority: str) -> str:
        if priority not in PRIORITY_LABELS:
            raise ValidationError(
                f"Invalid priority. Must be one of: {', '.join(PRIORITY_LABELS)}"
            )
        return priority

    def ensure_section_deletable(
        self, board: Board, section_id: str, tasks_in_section: int
    ) -> dict:
        section = board.find_section(section_id)
        if section is None:
            raise NotFoundError("Section not found")
        if tasks_in_section > 0:
            raise SectionInUse(section["name"], tasks_in_section)
        if len(board.sections) <= 1:
            raise ConflictError("A board must keep at least one section")
        return section

    def plan_task_update(
        self,
        account: Account,
        board: Board,
        task: Task,
        changes: dict[str, str | None],
        has_assigned_tasks: bool = False,
    ) -> TaskUpdatePlan:
        """
        Work out which fields actually change and check the account may change them.

        ``changes`` maps field name to requested value; ``None`` means the field
        was not sent. Values equal to the current ones are ignored, so a request
        that changes nothing yields an empty plan.
        """
        changed = {
            name: value
            for name, value in changes.items()
            if value is not None and value != getattr(task, name)
        }
        if not changed:
            return TaskUpdatePlan()

        if any(name in changed for name in EDITABLE_FIELDS):
            if not self.can_edit_task_fields(account, task):
                raise ForbiddenError("You do not have permission to update this task")
        if "status" in changed and not self.can_move_task(account, board, has_assigned_tasks):
            raise ForbiddenError("You do not have permission to move tasks in this board")

        plan = TaskUpdatePlan()

        if "title" in changed:
            title = changed["title"].strip()
            if not title:
                raise ValidationError("Task title is required")
            if len(title) > MAX_TITLE_LENGTH:
                raise ValidationError(f"Task title cannot exceed {MAX_TITLE_LENGTH} characters")
            plan.updates["title"] = title
            plan.activities.append(ActivityChange("updated", "title", task.title or "", title))

        if "description" in changed:
            plan.updates["description"] = changed["description"]
            plan.activities.append(
                ActivityChange(
                    "updated", "description", task.description or "", changed["description"]
                )
            )

        if "status" in changed:
            new_status = self.validate_status_transition(board, changed["status"])
            plan.updates["status"] = new_status
            old_section = board.find_section(task.status)
            new_section = board.find_section(new_status)
            plan.activities.append(
                ActivityChange(
                    "moved",
                    "status",
                    old_section["name"] if old_section else task.status,
                    new_section["name"] if new_section else new_status,
                )
            )

        if "priority" in changed:
            priority = self.validate_priority(changed["priority"])
            plan.updates["priority"] = priority
            plan.activities.append(
                ActivityChange(
                    "updated",
                    "priority",
                    PRIORITY_LABELS.get(task.priority, task.priority),
                    PRIORITY_LABELS[priority],
                )
            )

        if "assignee" in changed:
            assignee = changed["assignee"].strip()
            if assignee != task.assignee:
                plan.updates["assignee"] = assignee
                plan.activities.append(
                    ActivityChange(
                        "updated",
                        "assignee",
                        task.assignee or "Unassigned",
                        assignee or "Unassigned",
                    )
                )

        return plan


policy = Policy()
