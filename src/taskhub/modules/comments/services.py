"""Comment service.

Reading and writing the comments of a task requires read access to the
task. Editing and deleting a comment is reserved for its author.
"""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from taskhub.core.auth.schemas import Actor
from taskhub.core.errors import ForbiddenError, NotFoundError
from taskhub.core.tenancy.scope import TenantScope
from taskhub.modules.comments.models import Comment
from taskhub.modules.comments.repos import CommentRepo
from taskhub.modules.comments.schemas import CommentCreate, CommentUpdate
from taskhub.modules.tasks.services import TaskSvc


logger = structlog.get_logger()


class CommentService:
    def __init__(self, repo: CommentRepo, tasks: TaskSvc) -> None:
        self.repo = repo
        self.tasks = tasks

    async def _get_own_comment(self, actor: Actor, comment_id: UUID, verb: str) -> Comment:
        comment = await self.repo.get_by_id(comment_id)
        if not comment:
            raise NotFoundError("comment", comment_id)
        if comment.author_id != actor.id:
            raise ForbiddenError(
                f"Only the author can {verb} this comment",
                error_code="not_comment_author",
            )
        return comment

    async def list_comments(
        self, actor: Actor, scope: TenantScope | None, task_id: UUID
    ) -> list[Comment]:
        """List a task's comments.

        Raises:
            NotFoundError: If the task does not exist in this scope
            ForbiddenError: If the actor may not read the task
        """
        task = await self.tasks.get_task(actor, scope, task_id)
        return await self.repo.list_for_task(task.id)

    async def add_comment(
        self,
        actor: Actor,
        scope: TenantScope | None,
        task_id: UUID,
        data: CommentCreate,
    ) -> Comment:
        task = await self.tasks.get_task(actor, scope, task_id)
        comment = await self.repo.create(
            Comment(content=data.content, task_id=task.id, author_id=actor.id)
        )

        logger.info(
            "comment_created",
            comment_id=str(comment.id),
            task_id=str(task.id),
            author_id=str(actor.id),
        )
        return comment

    async def update_comment(
        self, actor: Actor, comment_id: UUID, data: CommentUpdate
    ) -> Comment:
        """Replace a comment's content.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the actor did not write it
        """
        comment = await self._get_own_comment(actor, comment_id, "edit")
        comment.content = data.content
        return await self.repo.update(comment)

    async def delete_comment(self, actor: Actor, comment_id: UUID) -> None:
        comment = await self._get_own_comment(actor, comment_id, "delete")
        await self.repo.delete(comment)

        logger.info("comment_deleted", comment_id=str(comment_id), deleted_by=str(actor.id))


CommentSvc = Annotated[CommentService, Depends(CommentService)]
