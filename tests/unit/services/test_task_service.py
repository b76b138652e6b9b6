"""Unit tests for TaskService."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from pydantic import ValidationError

from taskhub.core.errors import BadRequestError, ForbiddenError, NotFoundError
from taskhub.core.permissions.roles import OrgRole, Role
from taskhub.core.tenancy import TenantScope
from taskhub.modules.tasks.models import TaskStatus
from taskhub.modules.tasks.schemas import TaskCreate, TaskUpdate
from taskhub.modules.tasks.services import TaskService
from tests.factories.actor import ActorFactory
from tests.factories.models import make_task, make_user, passthrough, persist


pytestmark = pytest.mark.unit


@pytest.fixture
def task_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = persist
    repo.update.side_effect = passthrough
    return repo


@pytest.fixture
def user_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.side_effect = lambda user_id: make_user(user_id)
    return repo


@pytest.fixture
def service(task_repo, user_repo) -> TaskService:
    return TaskService(repo=task_repo, users=user_repo, teams=AsyncMock())


class TestCreateTask:
    async def test_personal_task(self, service):
        actor = ActorFactory.build()

        task = await service.create_task(actor, None, TaskCreate(title="Hello"))

        assert task.creator_id == actor.id
        assert task.organization_id is None

    async def test_scoped_task(self, service):
        scope = TenantScope(organization_id=uuid4(), role=OrgRole.MEMBER)

        task = await service.create_task(ActorFactory.build(), scope, TaskCreate(title="Hello"))

        assert task.organization_id == scope.organization_id

    async def test_unknown_assignee(self, service, user_repo, task_repo):
        user_repo.get_by_id.side_effect = None
        user_repo.get_by_id.return_value = None

        with pytest.raises(BadRequestError):
            await service.create_task(
                ActorFactory.build(), None, TaskCreate(title="Hello", assigned_to_id=uuid4())
            )

        task_repo.create.assert_not_awaited()


class TestTaskAccess:
    async def test_scope_mismatch_is_not_found(self, service, task_repo):
        actor = ActorFactory.build(role=Role.SUPER_ADMIN)
        task_repo.get_by_id.return_value = make_task(creator_id=actor.id, organization_id=uuid4())
        scope = TenantScope(organization_id=uuid4(), role=OrgRole.SUPER_ADMIN)

        with pytest.raises(NotFoundError):
            await service.get_task(actor, scope, uuid4())

    async def test_personal_view_of_organization_task(self, service, task_repo):
        """Without a scope, ownership alone decides access."""
        actor = ActorFactory.build()
        task = make_task(creator_id=actor.id, organization_id=uuid4())
        task_repo.get_by_id.return_value = task

        assert await service.get_task(actor, None, task.id) is task

    async def test_update_applies_only_set_fields(self, service, task_repo):
        actor = ActorFactory.build()
        task = make_task(creator_id=actor.id, title="Original")
        task_repo.get_by_id.return_value = task

        updated = await service.update_task(
            actor, None, task.id, TaskUpdate(status=TaskStatus.REVIEW)
        )

        assert updated.status == TaskStatus.REVIEW
        assert updated.title == "Original"

    async def test_update_clears_description_and_due_date(self, service, task_repo):
        actor = ActorFactory.build()
        task = make_task(
            creator_id=actor.id,
            description="Draft",
            due_date=datetime(2030, 1, 1, tzinfo=UTC),
        )
        task_repo.get_by_id.return_value = task

        updated = await service.update_task(
            actor, None, task.id, TaskUpdate(description=None, due_date=None)
        )

        assert updated.description is None
        assert updated.due_date is None
        assert updated.title == "Write the report"

    def test_required_fields_cannot_be_cleared(self):
        for field_name in ("title", "status", "priority"):
            with pytest.raises(ValidationError):
                TaskUpdate.model_validate({field_name: None})

    async def test_update_denied_for_stranger(self, service, task_repo):
        task_repo.get_by_id.return_value = make_task(creator_id=uuid4())

        with pytest.raises(ForbiddenError):
            await service.update_task(ActorFactory.build(), None, uuid4(), TaskUpdate(title="x"))

        task_repo.update.assert_not_awaited()

    async def test_assign_checks_permission_before_assignee(self, service, task_repo, user_repo):
        task_repo.get_by_id.return_value = make_task(creator_id=uuid4())

        with pytest.raises(ForbiddenError):
            await service.assign_task(ActorFactory.build(), None, uuid4(), uuid4())

        user_repo.get_by_id.assert_not_awaited()

    async def test_unassign(self, service, task_repo):
        actor = ActorFactory.build()
        task = make_task(creator_id=actor.id, assigned_to_id=uuid4())
        task_repo.get_by_id.return_value = task

        result = await service.assign_task(actor, None, task.id, None)

        assert result.assigned_to_id is None

    async def test_admin_deletes_any(self, service, task_repo):
        task = make_task(creator_id=uuid4())
        task_repo.get_by_id.return_value = task

        await service.delete_task(ActorFactory.build(role=Role.ADMIN), None, task.id)

        task_repo.delete.assert_awaited_once_with(task)


class TestListTasks:
    async def test_filters_passed_through(self, service, task_repo):
        actor = ActorFactory.build()
        task_repo.list_tasks.return_value = ([], 0)
        team_id = uuid4()

        await service.list_tasks(actor, None, 2, 10, status=TaskStatus.TODO, team_id=team_id)

        filters = task_repo.list_tasks.await_args.args[0]
        assert filters.user_id == actor.id
        assert filters.status == TaskStatus.TODO
        assert filters.team_id == team_id
        assert task_repo.list_tasks.await_args.kwargs == {"page": 2, "page_size": 10}
