"""Comment API routes.

Task comments live under ``/tasks/{task_id}/comments`` and follow the
task's tenant scope; a single comment is addressed by its own id.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from taskhub.core.auth.dependencies import CurrentActor, get_current_actor
from taskhub.core.tenancy.dependencies import TenantScopeDep
from taskhub.modules.comments.schemas import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
)
from taskhub.modules.comments.services import CommentSvc


router = APIRouter(
    tags=["comments"],
    dependencies=[Depends(get_current_actor)],
)


@router.get(
    "/tasks/{task_id}/comments",
    response_model=list[CommentResponse],
    summary="List task comments",
)
async def list_comments(
    task_id: UUID,
    actor: CurrentActor,
    scope: TenantScopeDep,
    service: CommentSvc,
) -> list[CommentResponse]:
    comments = await service.list_comments(actor, scope, task_id)
    return [CommentResponse.model_validate(c) for c in comments]


@router.post(
    "/tasks/{task_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a task",
)
async def add_comment(
    task_id: UUID,
    data: CommentCreate,
    actor: CurrentActor,
    scope: TenantScopeDep,
    service: CommentSvc,
) -> CommentResponse:
    """Comment on a task the caller can read."""
    comment = await service.add_comment(actor, scope, task_id, data)
    return CommentResponse.model_validate(comment)


@router.put(
    "/comments/{comment_id}",
    response_model=CommentResponse,
    summary="Edit a comment",
)
async def update_comment(
    comment_id: UUID,
    data: CommentUpdate,
    actor: CurrentActor,
    service: CommentSvc,
) -> CommentResponse:
    """Edit a comment. Its author only."""
    comment = await service.update_comment(actor, comment_id, data)
    return CommentResponse.model_validate(comment)


@router.delete(
    "/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a comment",
)
async def delete_comment(
    comment_id: UUID,
    actor: CurrentActor,
    service: CommentSvc,
) -> None:
    """Delete a comment. Its author only."""
    await service.delete_comment(actor, comment_id)
