"""Pydantic schemas for comments."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from taskhub.core.constants import MAX_COMMENT_LENGTH


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=MAX_COMMENT_LENGTH)


class CommentUpdate(CommentCreate):
    pass


class CommentResponse(BaseModel):
    id: UUID
    content: str
    task_id: UUID
    author_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
