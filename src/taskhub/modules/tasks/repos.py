"""Task repository for database operations."""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import Select, func, or_, select

from taskhub.core.database import DBSession
from taskhub.modules.tasks.models import Task, TaskPriority, TaskStatus


@dataclass
class TaskFilters:
    """Listing filters. Exactly one of ``organization_id`` or ``user_id`` is set."""

    organization_id: UUID | None = None
    user_id: UUID | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    team_id: UUID | None = None


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, task: Task) -> Task:
        self.session.add(task)
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def get_by_id(self, task_id: UUID) -> Task | None:
        return await self.session.get(Task, task_id)

    def _apply_filters(self, stmt: Select, filters: TaskFilters) -> Select:
        if filters.organization_id is not None:
            stmt = stmt.where(Task.organization_id == filters.organization_id)
        else:
            stmt = stmt.where(
                or_(
                    Task.creator_id == filters.user_id,
                    Task.assigned_to_id == filters.user_id,
                )
            )
        if filters.status is not None:
            stmt = stmt.where(Task.status == filters.status)
        if filters.priority is not None:
            stmt = stmt.where(Task.priority == filters.priority)
        if filters.team_id is not None:
            stmt = stmt.where(Task.team_id == filters.team_id)
        return stmt

    async def list_tasks(
        self,
        filters: TaskFilters,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Task], int]:
        """List tasks matching ``filters`` with pagination.

        Returns:
            Tuple of (tasks list, total count)
        """
        count_stmt = self._apply_filters(select(func.count()).select_from(Task), filters)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            self._apply_filters(select(Task), filters)
            .order_by(Task.created_at.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def update(self, task: Task) -> Task:
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def delete(self, task: Task) -> None:
        await self.session.delete(task)
        await self.session.flush()


TaskRepo = Annotated[TaskRepository, Depends(TaskRepository)]
