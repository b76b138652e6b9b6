"""Role enumerations and their rank tables.

Three independent authorization dimensions exist:

- ``Role``: the actor's global role, totally ordered.
- ``OrgRole``: the role held inside one organization, totally ordered.
- ``TeamRole``: the role held inside one team, compared by equality only.

The global and organization tables are separate and are never compared
against each other: a global ``USER`` may be an organization ``SUPER_ADMIN``.
"""

from collections.abc import Iterable
from enum import StrEnum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from taskhub.core.auth.schemas import Actor


class Role(StrEnum):
    """Global user role."""

    USER = "USER"
    TEAM_LEAD = "TEAM_LEAD"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class OrgRole(StrEnum):
    """Role held within a single organization."""

    MEMBER = "MEMBER"
    MANAGER = "MANAGER"
    SUPER_ADMIN = "SUPER_ADMIN"


class TeamRole(StrEnum):
    """Role held within a single team."""

    MEMBER = "MEMBER"
    LEADER = "LEADER"


ROLE_HIERARCHY: dict[Role, int] = {
    Role.USER: 1,
    Role.TEAM_LEAD: 2,
    Role.MANAGER: 3,
    Role.ADMIN: 4,
    Role.SUPER_ADMIN: 5,
}

ORG_ROLE_HIERARCHY: dict[OrgRole, int] = {
    OrgRole.MEMBER: 1,
    OrgRole.MANAGER: 2,
    OrgRole.SUPER_ADMIN: 3,
}


def is_role_at_least(role: Role, required: Role) -> bool:
    """Return True if ``role`` ranks at or above ``required``."""
    return ROLE_HIERARCHY[Role(role)] >= ROLE_HIERARCHY[Role(required)]


def is_org_role_at_least(role: OrgRole, required: OrgRole) -> bool:
    """Return True if the organization ``role`` ranks at or above ``required``."""
    return ORG_ROLE_HIERARCHY[OrgRole(role)] >= ORG_ROLE_HIERARCHY[OrgRole(required)]


def has_permission(role: Role, allowed_roles: Iterable[Role]) -> bool:
    """Return True if ``role`` is one of ``allowed_roles`` (no hierarchy)."""
    return role in set(allowed_roles)


def has_minimum_role(actor: "Actor", minimum: Role) -> bool:
    return is_role_at_least(actor.role, minimum)


def is_admin(actor: "Actor") -> bool:
    return has_minimum_role(actor, Role.ADMIN)
