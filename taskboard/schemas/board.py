"""Board and section schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SectionOut(BaseModel):
    id: str
    name: str
    order: int


class BoardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(validation_alias="board_id")
    name: str
    description: str
    owner_id: str = Field(validation_alias="owner_account_id")
    company_id: str = Field(validation_alias="tenant_id")
    assignees: list[str]
    sections: list[SectionOut]
    version: int
    created_at: datetime
    updated_at: datetime

    @field_validator("sections", mode="before")
    @classmethod
    def sort_sections(cls, v):
        return sorted(v or [], key=lambda s: s.get("order", 0) if isinstance(s, dict) else s.order)


def as_name_list(v):
    """Accept a single assignee name where a list is expected."""
    if v is None or isinstance(v, list):
        return v
    return [v]


class CreateBoardRequest(BaseModel):
    """POST /api/boards request. ``sections`` are display names, in order."""

    name: str | None = None
    description: str | None = None
    assignees: list[str] | None = None
    sections: list[str] | None = None

    @field_validator("assignees", mode="before")
    @classmethod
    def normalize_assignees(cls, v):
        return as_name_list(v)


class UpdateBoardRequest(BaseModel):
    """PUT /api/boards/{id} request."""

    name: str | None = None
    description: str | None = None
    assignees: list[str] | None = None
    expected_version: int | None = None

    @field_validator("assignees", mode="before")
    @classmethod
    def normalize_assignees(cls, v):
        return as_name_list(v)


class SectionRequest(BaseModel):
    """Add or rename a section."""

    name: str | None = None
    expected_version: int | None = None


class ReorderSectionsRequest(BaseModel):
    section_ids: list[str]
    expected_version: int | None = None


class MessageResponse(BaseModel):
    message: str
