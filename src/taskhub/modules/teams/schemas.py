"""Pydantic schemas for teams."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from taskhub.core.constants import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH
from taskhub.core.permissions.roles import TeamRole


class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)


class TeamUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)


class TeamResponse(BaseModel):
    id: UUID
    organization_id: UUID
    name: str
    description: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TeamMemberCreate(BaseModel):
    user_id: UUID
    role: TeamRole = TeamRole.MEMBER


class TeamMemberResponse(BaseModel):
    id: UUID
    user_id: UUID
    team_id: UUID
    role: TeamRole
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
