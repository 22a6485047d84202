"""Column types shared by the models."""

from datetime import datetime, timezone

from sqlalchemy import JSON, String
from sqlalchemy.dialects.postgresql import JSONB

# UUIDs are stored as text so the same models run on postgres and sqlite.
IdType = String(36)

# JSONB on postgres, plain JSON elsewhere.
JsonType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
