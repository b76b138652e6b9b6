"""Task service for business logic.

Every operation on an existing task builds a ``TaskResource`` from the
stored row and asks the permission evaluator before touching it.
"""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from taskhub.core.auth.schemas import Actor
from taskhub.core.errors import BadRequestError, NotFoundError
from taskhub.core.permissions import Action, TaskResource, ensure_can_perform
from taskhub.core.tenancy.scope import TenantScope
from taskhub.modules.tasks.models import Task, TaskPriority, TaskStatus
from taskhub.modules.tasks.repos import TaskFilters, TaskRepo
from taskhub.modules.tasks.schemas import TaskCreate, TaskUpdate
from taskhub.modules.teams.repos import TeamRepo
from taskhub.modules.users.repos import UserRepo


logger = structlog.get_logger()


class TaskService:
    """Service for task operations."""

    def __init__(self, repo: TaskRepo, users: UserRepo, teams: TeamRepo) -> None:
        self.repo = repo
        self.users = users
        self.teams = teams

    async def _check_assignee(self, assignee_id: UUID | None) -> None:
        if assignee_id is not None and not await self.users.get_by_id(assignee_id):
            raise BadRequestError(
                "Assigned user not found",
                error_code="assignee_not_found",
            )

    async def _get_task(self, scope: TenantScope | None, task_id: UUID) -> Task:
        """Load a task visible from the current scope.

        Inside an organization scope, tasks of other organizations are
        reported as missing.
        """
        task = await self.repo.get_by_id(task_id)
        if not task or (
            scope is not None and task.organization_id != scope.organization_id
        ):
            raise NotFoundError("task", task_id)
        return task

    async def create_task(
        self,
        actor: Actor,
        scope: TenantScope | None,
        data: TaskCreate,
    ) -> Task:
        """Create a task owned by the actor.

        Raises:
            BadRequestError: If the assignee or team is unknown
        """
        ensure_can_perform(actor, Action.CREATE, None)
        await self._check_assignee(data.assigned_to_id)

        if data.team_id is not None and (
            scope is None
            or not await self.teams.get_by_id(data.team_id, scope.organization_id)
        ):
            raise BadRequestError(
                "Team does not belong to this organization",
                error_code="invalid_team",
            )

        task = await self.repo.create(
            Task(
                title=data.title,
                description=data.description,
                status=data.status,
                priority=data.priority,
                due_date=data.due_date,
                creator_id=actor.id,
                assigned_to_id=data.assigned_to_id,
                organization_id=scope.organization_id if scope else None,
                team_id=data.team_id,
            )
        )

        logger.info(
            "task_created",
            task_id=str(task.id),
            created_by=str(actor.id),
            organization_id=str(task.organization_id) if task.organization_id else None,
        )
        return task

    async def get_task(
        self, actor: Actor, scope: TenantScope | None, task_id: UUID
    ) -> Task:
        """Get a task the actor may read.

        Raises:
            NotFoundError: If the task does not exist in this scope
            ForbiddenError: If the actor may not read it
        """
        task = await self._get_task(scope, task_id)
        ensure_can_perform(actor, Action.READ, TaskResource.from_task(task))
        return task

    async def list_tasks(
        self,
        actor: Actor,
        scope: TenantScope | None,
        page: int,
        page_size: int,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
        team_id: UUID | None = None,
    ) -> tuple[list[Task], int]:
        """List organization tasks inside a scope, the actor's own otherwise."""
        if scope is not None:
            filters = TaskFilters(organization_id=scope.organization_id)
        else:
            filters = TaskFilters(user_id=actor.id)
        filters.status = status
        filters.priority = priority
        filters.team_id = team_id
        return await self.repo.list_tasks(filters, page=page, page_size=page_size)

    async def update_task(
        self,
        actor: Actor,
        scope: TenantScope | None,
        task_id: UUID,
        data: TaskUpdate,
    ) -> Task:
        """Apply a partial update.

        Raises:
            NotFoundError: If the task does not exist in this scope
            ForbiddenError: If the actor may not update it
        """
        task = await self._get_task(scope, task_id)
        ensure_can_perform(actor, Action.UPDATE, TaskResource.from_task(task))

        for field_name, value in data.model_dump(exclude_unset=True).items():
            setattr(task, field_name, value)
        task = await self.repo.update(task)

        logger.info("task_updated", task_id=str(task.id), updated_by=str(actor.id))
        return task

    async def assign_task(
        self,
        actor: Actor,
        scope: TenantScope | None,
        task_id: UUID,
        assignee_id: UUID | None,
    ) -> Task:
        """Assign a task, or clear its assignee with ``None``.

        Raises:
            NotFoundError: If the task does not exist in this scope
            ForbiddenError: If the actor may not assign it
            BadRequestError: If the assignee does not exist
        """
        task = await self._get_task(scope, task_id)
        ensure_can_perform(actor, Action.ASSIGN, TaskResource.from_task(task))
        await self._check_assignee(assignee_id)

        previous = task.assigned_to_id
        task.assigned_to_id = assignee_id
        task = await self.repo.update(task)

        logger.info(
            "task_assigned",
            task_id=str(task.id),
            assigned_by=str(actor.id),
            previous_assignee=str(previous) if previous else None,
            assignee=str(assignee_id) if assignee_id else None,
        )
        return task

    async def delete_task(
        self, actor: Actor, scope: TenantScope | None, task_id: UUID
    ) -> None:
        """Delete a task.

        Raises:
            NotFoundError: If the task does not exist in this scope
            ForbiddenError: If the actor may not delete it
        """
        task = await self._get_task(scope, task_id)
        ensure_can_perform(actor, Action.DELETE, TaskResource.from_task(task))
        await self.repo.delete(task)

        logger.info("task_deleted", task_id=str(task_id), deleted_by=str(actor.id))


TaskSvc = Annotated[TaskService, Depends(TaskService)]
