"""Task activity model."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.database import Base
from taskboard.models.types import IdType, utcnow


class TaskActivity(Base):
    """Per-task change history - append-only.

    ``task_id`` is not a foreign key: the ``deleted`` record outlives its task.
    """

    __tablename__ = "task_activities"

    activity_id: Mapped[str] = mapped_column(IdType, primary_key=True)
    task_id: Mapped[str] = mapped_column(IdType, nullable=False, index=True)
    actor_account_id: Mapped[str] = mapped_column(IdType, nullable=False)
    actor_name: Mapped[str] = mapped_column(String(100), nullable=False)
    action: Mapped[str] = mapped_column(String(20), nullable=False)  # created|updated|moved|deleted
    field: Mapped[str] = mapped_column(String(20), nullable=False, default="all")
    old_value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    new_value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
