"""Database models."""

from taskboard.models.tenant import Tenant
from taskboard.models.account import Account, Role
from taskboard.models.board import Board, DEFAULT_SECTIONS
from taskboard.models.task import Priority, Task
from taskboard.models.activity import TaskActivity

__all__ = [
    "Tenant",
    "Account",
    "Role",
    "Board",
    "DEFAULT_SECTIONS",
    "Task",
    "Priority",
    "TaskActivity",
]
