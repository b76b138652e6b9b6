"""User API routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from taskhub.core.auth.dependencies import CurrentActor
from taskhub.core.permissions.guards import AdminActor, require_min_role
from taskhub.core.permissions.roles import Role
from taskhub.modules.users.schemas import (
    UserListResponse,
    UserResponse,
    UserRoleUpdate,
    UserUpdate,
)
from taskhub.modules.users.services import UserSvc


router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse, summary="Current user profile")
async def get_me(actor: CurrentActor, service: UserSvc) -> UserResponse:
    user = await service.get_user(actor.id)
    return UserResponse.model_validate(user)


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
    dependencies=[Depends(require_min_role(Role.MANAGER))],
)
async def list_users(
    service: UserSvc,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=100)] = 20,
    role: Role | None = None,
) -> UserListResponse:
    """List users, optionally of one role. Managers and above only."""
    users, total = await service.list_users(page, page_size, role)
    return UserListResponse(
        items=[UserResponse.model_validate(u) for u in users],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.patch("/{user_id}", response_model=UserResponse, summary="Update a profile")
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    actor: CurrentActor,
    service: UserSvc,
) -> UserResponse:
    """Update a user profile. Users may only edit their own profile."""
    user = await service.update_profile(actor, user_id, data)
    return UserResponse.model_validate(user)


@router.put("/{user_id}/role", response_model=UserResponse, summary="Change a user's role")
async def set_user_role(
    user_id: UUID,
    data: UserRoleUpdate,
    actor: AdminActor,
    service: UserSvc,
) -> UserResponse:
    user = await service.set_role(actor, user_id, data.role)
    return UserResponse.model_validate(user)


@router.post("/{user_id}/suspend", response_model=UserResponse, summary="Suspend a user")
async def suspend_user(
    user_id: UUID,
    actor: AdminActor,
    service: UserSvc,
) -> UserResponse:
    """Suspend an account. Administrators only; super admins cannot be suspended."""
    user = await service.suspend(actor, user_id)
    return UserResponse.model_validate(user)


@router.post("/{user_id}/activate", response_model=UserResponse, summary="Reactivate a user")
async def activate_user(
    user_id: UUID,
    actor: AdminActor,
    service: UserSvc,
) -> UserResponse:
    user = await service.activate(actor, user_id)
    return UserResponse.model_validate(user)
