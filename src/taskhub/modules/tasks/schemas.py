"""Pydantic schemas for tasks."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskhub.core.constants import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH
from taskhub.modules.tasks.models import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    assigned_to_id: UUID | None = None
    team_id: UUID | None = None


class TaskUpdate(BaseModel):
    """Partial update. Reassignment goes through the assign endpoint."""

    title: str | None = Field(None, min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None

    @field_validator("title", "status", "priority")
    @classmethod
    def not_null(cls, v):
        """Only the description and due date can be cleared."""
        if v is None:
            raise ValueError("Field cannot be cleared")
        return v


class TaskAssign(BaseModel):
    assigned_to_id: UUID | None


class TaskResponse(BaseModel):
    id: UUID
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None
    creator_id: UUID
    assigned_to_id: UUID | None
    organization_id: UUID | None
    team_id: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskListResponse(BaseModel):
    items: list[TaskResponse]
    total: int
    page: int
    page_size: int
