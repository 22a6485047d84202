"""Account model."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.database import Base
from taskboard.models.types import IdType, utcnow


class Role(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


class Account(Base):
    """User account. ``tenant_id`` is null only for accounts that predate tenants."""

    __tablename__ = "accounts"

    account_id: Mapped[str] = mapped_column(IdType, primary_key=True)
    tenant_id: Mapped[str | None] = mapped_column(
        IdType, ForeignKey("tenants.tenant_id"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Role.USER.value)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
