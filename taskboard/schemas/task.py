"""Task and activity schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(validation_alias="task_id")
    title: str
    description: str
    status: str
    priority: str
    assignee: str
    owner_id: str = Field(validation_alias="owner_account_id")
    board_id: str
    company_id: str = Field(validation_alias="tenant_id")
    created_at: datetime
    updated_at: datetime


class CreateTaskRequest(BaseModel):
    """POST /api/tasks request. ``status`` defaults to the board's first section."""

    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    assignee: str | None = None
    board_id: str | None = None


class UpdateTaskRequest(BaseModel):
    """PUT /api/tasks/{id} request. Omitted fields are left alone."""

    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    assignee: str | None = None


class ActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(validation_alias="activity_id")
    task_id: str
    user_id: str = Field(validation_alias="actor_account_id")
    user_name: str = Field(validation_alias="actor_name")
    action: str
    field: str
    old_value: str
    new_value: str
    created_at: datetime
