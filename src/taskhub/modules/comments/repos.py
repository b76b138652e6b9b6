"""Comment repository."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from taskhub.core.database import DBSession
from taskhub.modules.comments.models import Comment


class CommentRepository:
    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, comment: Comment) -> Comment:
        self.session.add(comment)
        await self.session.flush()
        await self.session.refresh(comment)
        return comment

    async def get_by_id(self, comment_id: UUID) -> Comment | None:
        return await self.session.get(Comment, comment_id)

    async def list_for_task(self, task_id: UUID) -> list[Comment]:
        """Comments of a task, oldest first."""
        stmt = (
            select(Comment)
            .where(Comment.task_id == task_id)
            .order_by(Comment.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, comment: Comment) -> Comment:
        await self.session.flush()
        await self.session.refresh(comment)
        return comment

    async def delete(self, comment: Comment) -> None:
        await self.session.delete(comment)
        await self.session.flush()


CommentRepo = Annotated[CommentRepository, Depends(CommentRepository)]
