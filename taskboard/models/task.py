"""Task model."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.database import Base
from taskboard.models.types import IdType, utcnow


class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(Base):
    """Task card. ``status`` is a section id of the board, ``assignee`` a display name."""

    __tablename__ = "tasks"

    task_id: Mapped[str] = mapped_column(IdType, primary_key=True)
    board_id: Mapped[str] = mapped_column(
        IdType, ForeignKey("boards.board_id"), nullable=False, index=True
    )
    tenant_id: Mapped[str] = mapped_column(
        IdType, ForeignKey("tenants.tenant_id"), nullable=False, index=True
    )
    owner_account_id: Mapped[str] = mapped_column(
        IdType, ForeignKey("accounts.account_id"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(100), nullable=False)
    priority: Mapped[str] = mapped_column(
        String(10), nullable=False, default=Priority.MEDIUM.value
    )
    assignee: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
