"""User service for business logic."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from taskhub.core.auth.schemas import Actor
from taskhub.core.errors import BadRequestError, ForbiddenError, NotFoundError
from taskhub.core.permissions import Action, UserResource, ensure_can_perform
from taskhub.core.permissions.roles import Role
from taskhub.modules.users.models import User
from taskhub.modules.users.repos import UserRepo
from taskhub.modules.users.schemas import UserUpdate


logger = structlog.get_logger()


class UserService:
    """Service for user profile and account operations."""

    def __init__(self, repo: UserRepo) -> None:
        self.repo = repo

    async def get_user(self, user_id: UUID) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("user", user_id)
        return user

    async def list_users(
        self, page: int, page_size: int, role: Role | None = None
    ) -> tuple[list[User], int]:
        return await self.repo.list_all(page=page, page_size=page_size, role=role)

    async def update_profile(
        self,
        actor: Actor,
        user_id: UUID,
        data: UserUpdate,
    ) -> User:
        """Update a profile the actor is allowed to edit.

        Raises:
            ForbiddenError: If the actor may not update this user
            NotFoundError: If the user does not exist
        """
        ensure_can_perform(actor, Action.UPDATE, UserResource(id=user_id))

        user = await self.get_user(user_id)
        if data.full_name is not None:
            user.full_name = data.full_name
        return await self.repo.update(user)

    async def set_role(self, actor: Actor, user_id: UUID, role: Role) -> User:
        """Change a user's global role. Callers must already be administrators.

        Raises:
            NotFoundError: If the user does not exist
            ForbiddenError: If administrators try to change their own role
        """
        user = await self.get_user(user_id)
        if user_id == actor.id and role != user.role:
            raise ForbiddenError(
                "Cannot modify your own role",
                error_code="self_role_change",
            )

        previous = user.role
        user.role = role
        user = await self.repo.update(user)

        logger.info(
            "user_role_changed",
            user_id=str(user_id),
            changed_by=str(actor.id),
            previous_role=str(previous),
            role=str(role),
        )
        return user

    async def suspend(self, actor: Actor, user_id: UUID) -> User:
        """Suspend an account. Suspended users can neither log in nor use a token.

        Raises:
            ForbiddenError: If the target is the actor or a super admin
            NotFoundError: If the user does not exist
            BadRequestError: If the account is already suspended
        """
        if user_id == actor.id:
            raise ForbiddenError(
                "Cannot suspend your own account",
                error_code="self_suspension",
            )

        user = await self.get_user(user_id)
        if not user.is_active:
            raise BadRequestError(
                "User is already suspended",
                error_code="already_suspended",
            )
        if user.role == Role.SUPER_ADMIN:
            raise ForbiddenError(
                "Cannot suspend Super Admin",
                error_code="super_admin_protected",
            )

        user.is_active = False
        user = await self.repo.update(user)
        logger.info("user_suspended", user_id=str(user_id), changed_by=str(actor.id))
        return user

    async def activate(self, actor: Actor, user_id: UUID) -> User:
        user = await self.get_user(user_id)
        if user.is_active:
            raise BadRequestError(
                "User is already active",
                error_code="already_active",
            )

        user.is_active = True
        user = await self.repo.update(user)
        logger.info("user_activated", user_id=str(user_id), changed_by=str(actor.id))
        return user


UserSvc = Annotated[UserService, Depends(UserService)]
