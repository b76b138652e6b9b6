"""Pydantic schemas for organizations and memberships."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from taskhub.core.constants import MAX_NAME_LENGTH, MAX_SLUG_LENGTH
from taskhub.core.permissions.roles import OrgRole
from taskhub.modules.organizations.models import PlanType


class OrganizationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str = Field(
        ...,
        min_length=2,
        max_length=MAX_SLUG_LENGTH,
        pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$",
    )


class OrganizationResponse(BaseModel):
    id: UUID
    name: str
    slug: str
    plan: PlanType
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MembershipCreate(BaseModel):
    user_id: UUID
    role: OrgRole = OrgRole.MEMBER


class MembershipResponse(BaseModel):
    id: UUID
    user_id: UUID
    organization_id: UUID
    role: OrgRole
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
