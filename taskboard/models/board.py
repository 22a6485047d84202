"""Board model with its ordered workflow sections."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.database import Base
from taskboard.models.types import IdType, JsonType, utcnow

DEFAULT_SECTIONS = [
    {"id": "todo", "name": "To Do", "order": 0},
    {"id": "in-progress", "name": "In Progress", "order": 1},
    {"id": "testing", "name": "Testing", "order": 2},
    {"id": "done", "name": "Done", "order": 3},
]


def default_sections() -> list[dict]:
    return [dict(s) for s in DEFAULT_SECTIONS]


class Board(Base):
    """Kanban board.

    ``assignees`` holds display names. ``sections`` is a list of
    ``{"id", "name", "order"}`` dicts; ``order`` only drives sorting and may
    have gaps. JSON columns are replaced wholesale on every write.
    """

    __tablename__ = "boards"

    board_id: Mapped[str] = mapped_column(IdType, primary_key=True)
    tenant_id: Mapped[str] = mapped_column(
        IdType, ForeignKey("tenants.tenant_id"), nullable=False, index=True
    )
    owner_account_id: Mapped[str] = mapped_column(
        IdType, ForeignKey("accounts.account_id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    assignees: Mapped[list] = mapped_column(JsonType, nullable=False, default=list)
    sections: Mapped[list] = mapped_column(JsonType, nullable=False, default=default_sections)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    def ordered_sections(self) -> list[dict]:
        return sorted(self.sections or [], key=lambda s: s.get("order", 0))

    def section_ids(self) -> list[str]:
        return [s["id"] for s in self.ordered_sections()]

    def find_section(self, section_id: str) -> dict | None:
        for section in self.sections or []:
            if section["id"] == section_id:
                return section
        return None
