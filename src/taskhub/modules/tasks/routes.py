"""Task API routes.

Requests naming an organization work on that organization's tasks;
requests without one work on the caller's personal tasks.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from taskhub.core.auth.dependencies import CurrentActor, get_current_actor
from taskhub.core.tenancy.dependencies import TenantScopeDep
from taskhub.modules.tasks.models import TaskPriority, TaskStatus
from taskhub.modules.tasks.schemas import (
    TaskAssign,
    TaskCreate,
    TaskListResponse,
    TaskResponse,
    TaskUpdate,
)
from taskhub.modules.tasks.services import TaskSvc


router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    dependencies=[Depends(get_current_actor)],
)


@router.get("", response_model=TaskListResponse, summary="List tasks")
async def list_tasks(
    actor: CurrentActor,
    scope: TenantScopeDep,
    service: TaskSvc,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=100)] = 20,
    task_status: Annotated[TaskStatus | None, Query(alias="status")] = None,
    priority: TaskPriority | None = None,
    team_id: UUID | None = None,
) -> TaskListResponse:
    tasks, total = await service.list_tasks(
        actor,
        scope,
        page,
        page_size,
        status=task_status,
        priority=priority,
        team_id=team_id,
    )
    return TaskListResponse(
        items=[TaskResponse.model_validate(t) for t in tasks],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
async def create_task(
    data: TaskCreate,
    actor: CurrentActor,
    scope: TenantScopeDep,
    service: TaskSvc,
) -> TaskResponse:
    task = await service.create_task(actor, scope, data)
    return TaskResponse.model_validate(task)


@router.get("/{task_id}", response_model=TaskResponse, summary="Get a task")
async def get_task(
    task_id: UUID,
    actor: CurrentActor,
    scope: TenantScopeDep,
    service: TaskSvc,
) -> TaskResponse:
    task = await service.get_task(actor, scope, task_id)
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskResponse, summary="Update a task")
async def update_task(
    task_id: UUID,
    data: TaskUpdate,
    actor: CurrentActor,
    scope: TenantScopeDep,
    service: TaskSvc,
) -> TaskResponse:
    """Update a task. Its creator, its assignee and managers may edit it."""
    task = await service.update_task(actor, scope, task_id, data)
    return TaskResponse.model_validate(task)


@router.put("/{task_id}/assignee", response_model=TaskResponse, summary="Assign a task")
async def assign_task(
    task_id: UUID,
    data: TaskAssign,
    actor: CurrentActor,
    scope: TenantScopeDep,
    service: TaskSvc,
) -> TaskResponse:
    """Assign a task. Its creator and team leads and above may assign it."""
    task = await service.assign_task(actor, scope, task_id, data.assigned_to_id)
    return TaskResponse.model_validate(task)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
)
async def delete_task(
    task_id: UUID,
    actor: CurrentActor,
    scope: TenantScopeDep,
    service: TaskSvc,
) -> None:
    """Delete a task. Only its creator and administrators may delete it."""
    await service.delete_task(actor, scope, task_id)
