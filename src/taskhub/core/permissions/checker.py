"""Permission evaluation.

This module decides whether an actor may perform an action on a
resource, based on the actor's global role and the ownership fields
of the resource. Evaluation is pure: no I/O, no shared state.
"""

from typing import TYPE_CHECKING

import structlog

from taskhub.core.constants import MSG_INSUFFICIENT_PERMISSIONS
from taskhub.core.errors import ForbiddenError
from taskhub.core.permissions.resources import Action, Resource, TaskResource
from taskhub.core.permissions.roles import Role, is_role_at_least


if TYPE_CHECKING:
    from taskhub.core.auth.schemas import Actor


logger = structlog.get_logger()


def _as_task(resource: Resource) -> TaskResource | None:
    if resource is not None and resource.kind == "task":
        return resource
    return None


def can_perform_action(actor: "Actor", action: Action, resource: Resource) -> bool:
    """Check if an actor can perform an action on a resource.

    Rules are evaluated in order and the first match wins:

    1. ``SUPER_ADMIN`` may do anything.
    2. ``ADMIN`` may do anything. Admin actions on super-admin accounts
       are not restricted here.
    3. ``create`` is open to every authenticated actor.
    4. ``read`` on a task requires being its creator or assignee, or
       ``MANAGER`` and above; other resources are readable.
    5. ``update`` on a task follows the read rule; on a user only the
       actor's own profile; anything else is denied.
    6. ``delete`` on a task requires being its creator or ``ADMIN``;
       anything else requires ``ADMIN``.
    7. ``assign`` on a task requires being its creator or ``TEAM_LEAD``
       and above; anything else is denied.
    8. ``manage`` requires ``MANAGER`` and above.

    Args:
        actor: The authenticated actor
        action: The action being attempted
        resource: The target, or None for ``create``

    Returns:
        True if the action is permitted
    """
    role = actor.role

    if role == Role.SUPER_ADMIN:
        return True

    if role == Role.ADMIN:
        return True

    if action == Action.CREATE:
        return is_role_at_least(role, Role.USER)

    # Dispatch on the resource tag before any ownership check
    task = _as_task(resource)
    is_creator = task is not None and task.creator_id == actor.id
    is_assignee = task is not None and task.assigned_to_id == actor.id

    if action == Action.READ:
        if task is not None:
            return is_creator or is_assignee or is_role_at_least(role, Role.MANAGER)
        return True

    if action == Action.UPDATE:
        if task is not None:
            return is_creator or is_assignee or is_role_at_least(role, Role.MANAGER)
        if resource is not None and resource.kind == "user":
            return resource.id == actor.id
        return False

    if action == Action.DELETE:
        if task is not None:
            return is_creator or is_role_at_least(role, Role.ADMIN)
        return is_role_at_least(role, Role.ADMIN)

    if action == Action.ASSIGN:
        if task is not None:
            return is_creator or is_role_at_least(role, Role.TEAM_LEAD)
        return False

    if action == Action.MANAGE:
        return is_role_at_least(role, Role.MANAGER)

    return False


def ensure_can_perform(actor: "Actor", action: Action, resource: Resource) -> None:
    """Raise ForbiddenError unless ``can_perform_action`` allows the action.

    Raises:
        ForbiddenError: If the action is not permitted
    """
    if can_perform_action(actor, action, resource):
        return

    logger.warning(
        "access_denied",
        reason="action_not_permitted",
        user_id=str(actor.id),
        role=str(actor.role),
        action=str(action),
        resource_kind=resource.kind if resource is not None else None,
        resource_id=str(resource.id) if resource is not None else None,
    )
    raise ForbiddenError(
        MSG_INSUFFICIENT_PERMISSIONS,
        error_code="permission_denied",
        details={"action": str(action)},
    )
