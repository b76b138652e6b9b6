"""Authorizable resources.

A resource handed to the permission evaluator is a tagged value: its
``kind`` is fixed when the resource is built and the evaluator dispatches
on that tag alone.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal
from uuid import UUID


if TYPE_CHECKING:
    from taskhub.modules.tasks.models import Task
    from taskhub.modules.users.models import User


class Action(StrEnum):
    """Actions an actor can attempt on a resource."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    ASSIGN = "assign"
    MANAGE = "manage"


@dataclass(frozen=True)
class TaskResource:
    """A task, identified by its ownership fields."""

    id: UUID
    creator_id: UUID
    assigned_to_id: UUID | None = None
    kind: Literal["task"] = field(default="task", init=False)

    @classmethod
    def from_task(cls, task: "Task") -> "TaskResource":
        return cls(
            id=task.id,
            creator_id=task.creator_id,
            assigned_to_id=task.assigned_to_id,
        )


@dataclass(frozen=True)
class UserResource:
    """A user account or profile."""

    id: UUID
    kind: Literal["user"] = field(default="user", init=False)

    @classmethod
    def from_user(cls, user: "User") -> "UserResource":
        return cls(id=user.id)


Resource = TaskResource | UserResource | None
