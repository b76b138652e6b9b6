"""User persistence."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import Select, func, select

from taskhub.core.database import DBSession
from taskhub.core.permissions.roles import Role
from taskhub.modules.users.models import User


class UserRepository:
    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> User | None:
        return await self.session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        """Emails are matched case-insensitively."""
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(
        self,
        *,
        page: int = 1,
        page_size: int = 20,
        role: Role | None = None,
    ) -> tuple[list[User], int]:
        """Return one page of users ordered by name, and the filtered total."""
        stmt: Select[tuple[User]] = select(User)
        if role is not None:
            stmt = stmt.where(User.role == role)

        total = await self.session.scalar(
            select(func.count()).select_from(stmt.subquery())
        )
        result = await self.session.execute(
            stmt.order_by(User.full_name, User.email)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return list(result.scalars().all()), total or 0

    async def update(self, user: User) -> User:
        await self.session.flush()
        await self.session.refresh(user)
        return user


UserRepo = Annotated[UserRepository, Depends(UserRepository)]
