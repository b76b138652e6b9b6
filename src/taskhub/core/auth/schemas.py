"""Authentication schemas for tokens and the authenticated actor."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from taskhub.core.permissions.roles import Role


class TokenData(BaseModel):
    """Claims of a verified access token."""

    user_id: UUID
    email: str | None = None
    exp: datetime
    type: str = "access"
    jti: str | None = None


class Actor(BaseModel):
    """The authenticated principal a request acts as.

    Built from the persisted user after token validation; this is the
    only identity value the access-control layer consumes.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    email: str
    role: Role
    is_active: bool = True


class AccessToken(BaseModel):
    """An issued access token."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
