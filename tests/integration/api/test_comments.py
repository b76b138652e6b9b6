"""Integration tests for comment endpoints."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from taskhub.core.permissions.roles import OrgRole
from taskhub.modules.comments.repos import CommentRepository
from taskhub.modules.tasks.repos import TaskRepository
from taskhub.modules.teams.repos import TeamRepository
from taskhub.modules.users.repos import UserRepository
from tests.factories.actor import ActorFactory
from tests.factories.models import make_comment, make_task, passthrough, persist


pytestmark = pytest.mark.integration

ORG_HEADER = "X-Organization-Id"


@pytest.fixture
def task_repo(app: FastAPI) -> AsyncMock:
    repo = AsyncMock()
    app.dependency_overrides[TaskRepository] = lambda: repo
    app.dependency_overrides[UserRepository] = lambda: AsyncMock()
    app.dependency_overrides[TeamRepository] = lambda: AsyncMock()
    return repo


@pytest.fixture
def comment_repo(app: FastAPI) -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = persist
    repo.update.side_effect = passthrough
    app.dependency_overrides[CommentRepository] = lambda: repo
    return repo


class TestTaskComments:
    async def test_creator_comments(self, client: AsyncClient, auth_state, task_repo, comment_repo):
        actor = ActorFactory.build()
        auth_state.actor = actor
        task = make_task(creator_id=actor.id)
        task_repo.get_by_id.return_value = task

        response = await client.post(
            f"/api/v1/tasks/{task.id}/comments", json={"content": "On it"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["author_id"] == str(actor.id)
        assert body["task_id"] == str(task.id)

    async def test_stranger_cannot_comment(self, client, auth_state, task_repo, comment_repo):
        auth_state.actor = ActorFactory.build()
        task_repo.get_by_id.return_value = make_task(creator_id=uuid4())

        response = await client.post(
            f"/api/v1/tasks/{uuid4()}/comments", json={"content": "On it"}
        )

        assert response.status_code == 403
        comment_repo.create.assert_not_awaited()

    async def test_missing_task(self, client, auth_state, task_repo, comment_repo):
        auth_state.actor = ActorFactory.build()
        task_repo.get_by_id.return_value = None

        response = await client.get(f"/api/v1/tasks/{uuid4()}/comments")

        assert response.status_code == 404
        assert response.json()["detail"] == "Task not found"

    async def test_content_length(self, client, auth_state, task_repo, comment_repo):
        auth_state.actor = ActorFactory.build()

        response = await client.post(
            f"/api/v1/tasks/{uuid4()}/comments", json={"content": "x" * 1001}
        )

        assert response.status_code == 422
        task_repo.get_by_id.assert_not_awaited()

    async def test_organization_member_lists(
        self, client, auth_state, membership_store, task_repo, comment_repo
    ):
        actor = ActorFactory.build()
        auth_state.actor = actor
        org_id = uuid4()
        membership_store.add(actor.id, org_id, OrgRole.MEMBER)
        task = make_task(creator_id=actor.id, organization_id=org_id)
        task_repo.get_by_id.return_value = task
        comment_repo.list_for_task.return_value = [
            make_comment(task.id, actor.id),
            make_comment(task.id, uuid4()),
        ]

        response = await client.get(
            f"/api/v1/tasks/{task.id}/comments", headers={ORG_HEADER: str(org_id)}
        )

        assert response.status_code == 200
        assert len(response.json()) == 2


class TestCommentAuthor:
    async def test_author_edits(self, client, auth_state, comment_repo):
        actor = ActorFactory.build()
        auth_state.actor = actor
        comment = make_comment(uuid4(), actor.id)
        comment_repo.get_by_id.return_value = comment

        response = await client.put(
            f"/api/v1/comments/{comment.id}", json={"content": "Edited"}
        )

        assert response.status_code == 200
        assert response.json()["content"] == "Edited"

    async def test_other_user_cannot_edit(self, client, auth_state, comment_repo):
        auth_state.actor = ActorFactory.build()
        comment_repo.get_by_id.return_value = make_comment(uuid4(), uuid4())

        response = await client.put(
            f"/api/v1/comments/{uuid4()}", json={"content": "Edited"}
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Only the author can edit this comment"

    async def test_author_deletes(self, client, auth_state, comment_repo):
        actor = ActorFactory.build()
        auth_state.actor = actor
        comment = make_comment(uuid4(), actor.id)
        comment_repo.get_by_id.return_value = comment

        response = await client.delete(f"/api/v1/comments/{comment.id}")

        assert response.status_code == 204
        comment_repo.delete.assert_awaited_once_with(comment)

    async def test_missing_comment(self, client, auth_state, comment_repo):
        auth_state.actor = ActorFactory.build()
        comment_repo.get_by_id.return_value = None

        response = await client.delete(f"/api/v1/comments/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "Comment not found"
