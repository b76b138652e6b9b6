"""Access control: role hierarchies, resources and permission evaluation.

Route guards live in ``taskhub.core.permissions.guards``; they depend on
the auth and tenancy layers and are imported from there directly.
"""

from taskhub.core.permissions.checker import can_perform_action, ensure_can_perform
from taskhub.core.permissions.resources import (
    Action,
    Resource,
    TaskResource,
    UserResource,
)
from taskhub.core.permissions.roles import (
    ORG_ROLE_HIERARCHY,
    ROLE_HIERARCHY,
    OrgRole,
    Role,
    TeamRole,
    has_minimum_role,
    has_permission,
    is_admin,
    is_org_role_at_least,
    is_role_at_least,
)


__all__ = [
    "ORG_ROLE_HIERARCHY",
    "ROLE_HIERARCHY",
    "Action",
    "OrgRole",
    "Resource",
    "Role",
    "TaskResource",
    "TeamRole",
    "UserResource",
    "can_perform_action",
    "ensure_can_perform",
    "has_minimum_role",
    "has_permission",
    "is_admin",
    "is_org_role_at_least",
    "is_role_at_least",
]
