"""Request guards for route protection.

Each factory returns a FastAPI dependency. Guards are composed by listing
them ahead of a handler:

    @router.get(
        "/reports",
        dependencies=[Depends(require_min_role(Role.MANAGER))],
    )
    async def reports(): ...

FastAPI resolves them in order, and the first guard that raises stops both
the chain and the handler. A guard never catches errors from another
guard; it only adds its own check.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

import structlog
from fastapi import Depends, Request

from taskhub.core.auth.dependencies import OptionalActor
from taskhub.core.auth.schemas import Actor
from taskhub.core.constants import (
    MSG_AUTHENTICATION_REQUIRED,
    MSG_INSUFFICIENT_ORG_PERMISSIONS,
    MSG_INSUFFICIENT_PERMISSIONS,
    MSG_INVALID_TEAM_ID,
    MSG_ORGANIZATION_CONTEXT_REQUIRED,
    MSG_TEAM_LEADER_REQUIRED,
    TEAM_PATH_PARAM,
)
from taskhub.core.errors import BadRequestError, ForbiddenError, UnauthorizedError
from taskhub.core.permissions.roles import (
    OrgRole,
    Role,
    TeamRole,
    has_permission,
    is_org_role_at_least,
    is_role_at_least,
)
from taskhub.core.tenancy.dependencies import TenantScopeDep
from taskhub.core.tenancy.scope import TenantScope, parse_identifier
from taskhub.core.tenancy.stores import TeamMembershipRecord, TeamMembershipStoreDep


logger = structlog.get_logger()


def _require_actor(actor: Actor | None) -> Actor:
    if actor is None:
        raise UnauthorizedError(
            MSG_AUTHENTICATION_REQUIRED,
            error_code="auth_required",
        )
    return actor


def _require_scope(scope: TenantScope | None) -> TenantScope:
    if scope is None:
        logger.warning("access_denied", reason="organization_context_missing")
        raise ForbiddenError(
            MSG_ORGANIZATION_CONTEXT_REQUIRED,
            error_code="organization_context_required",
        )
    return scope


def _deny_role(actor: Actor, required: list[str]) -> ForbiddenError:
    logger.warning(
        "access_denied",
        reason="insufficient_role",
        user_id=str(actor.id),
        role=str(actor.role),
        required=required,
    )
    return ForbiddenError(
        MSG_INSUFFICIENT_PERMISSIONS,
        error_code="insufficient_role",
        details={"required_roles": required},
    )


# ============================================================
# Global role guards
# ============================================================


def require_role(*allowed_roles: Role) -> Callable[[Actor | None], Actor]:
    """Allow only actors whose role is one of ``allowed_roles``.

    Raises:
        UnauthorizedError: If no actor is authenticated
        ForbiddenError: If the actor's role is not allowed
    """
    allowed = frozenset(allowed_roles)

    def guard(actor: OptionalActor) -> Actor:
        current = _require_actor(actor)
        if not has_permission(current.role, allowed):
            raise _deny_role(current, sorted(str(r) for r in allowed))
        return current

    return guard


def require_min_role(min_role: Role) -> Callable[[Actor | None], Actor]:
    """Allow only actors ranking at or above ``min_role``.

    Raises:
        UnauthorizedError: If no actor is authenticated
        ForbiddenError: If the actor ranks below ``min_role``
    """

    def guard(actor: OptionalActor) -> Actor:
        current = _require_actor(actor)
        if not is_role_at_least(current.role, min_role):
            raise _deny_role(current, [str(min_role)])
        return current

    return guard


def require_admin() -> Callable[[Actor | None], Actor]:
    return require_role(Role.ADMIN, Role.SUPER_ADMIN)


def require_manager() -> Callable[[Actor | None], Actor]:
    return require_role(Role.MANAGER, Role.ADMIN, Role.SUPER_ADMIN)


def require_team_lead() -> Callable[[Actor | None], Actor]:
    return require_role(Role.TEAM_LEAD, Role.MANAGER, Role.ADMIN, Role.SUPER_ADMIN)


# ============================================================
# Organization guards
# ============================================================


def require_org_role(
    min_role: OrgRole,
) -> Callable[[TenantScope | None], TenantScope]:
    """Allow only requests whose tenant scope ranks at or above ``min_role``.

    Raises:
        ForbiddenError: If no scope is attached or the role is insufficient
    """

    def guard(scope: TenantScopeDep) -> TenantScope:
        current = _require_scope(scope)
        if not is_org_role_at_least(current.role, min_role):
            logger.warning(
                "access_denied",
                reason="insufficient_org_role",
                organization_id=str(current.organization_id),
                role=str(current.role),
                required=str(min_role),
            )
            raise ForbiddenError(
                MSG_INSUFFICIENT_ORG_PERMISSIONS,
                error_code="insufficient_org_role",
                details={"required_org_role": str(min_role)},
            )
        return current

    return guard


def require_org_manager() -> Callable[[TenantScope | None], TenantScope]:
    return require_org_role(OrgRole.MANAGER)


def require_org_admin() -> Callable[[TenantScope | None], TenantScope]:
    return require_org_role(OrgRole.SUPER_ADMIN)


def require_organization() -> Callable[[TenantScope | None], TenantScope]:
    """Require an organization context, as a client error.

    Unlike ``require_org_role`` a missing scope here is a 400: the caller
    forgot to name an organization rather than lacking rights in one.
    """

    def guard(scope: TenantScopeDep) -> TenantScope:
        if scope is None:
            raise BadRequestError(
                MSG_ORGANIZATION_CONTEXT_REQUIRED,
                error_code="organization_context_required",
            )
        return scope

    return guard


# ============================================================
# Team guards
# ============================================================


def require_team_leader(
    team_id_param: str = TEAM_PATH_PARAM,
) -> Callable[..., Awaitable[TeamMembershipRecord]]:
    """Allow only the leaders of the team named by a path parameter.

    This guard performs its own membership lookup and is therefore async.

    Raises:
        UnauthorizedError: If no actor is authenticated
        BadRequestError: If the team id is missing or malformed
        ForbiddenError: If the actor does not lead the team
    """

    async def guard(
        request: Request,
        actor: OptionalActor,
        store: TeamMembershipStoreDep,
    ) -> TeamMembershipRecord:
        current = _require_actor(actor)
        raw_team_id = request.path_params.get(team_id_param)
        if not raw_team_id:
            raise BadRequestError(MSG_INVALID_TEAM_ID, error_code="invalid_identifier")
        team_id = parse_identifier(raw_team_id, MSG_INVALID_TEAM_ID)

        membership = await store.find_team_membership(current.id, team_id)
        if membership is None or TeamRole(membership.role) != TeamRole.LEADER:
            logger.warning(
                "access_denied",
                reason="not_team_leader",
                user_id=str(current.id),
                team_id=str(team_id),
            )
            raise ForbiddenError(
                MSG_TEAM_LEADER_REQUIRED,
                error_code="not_team_leader",
            )
        return membership

    return guard


# Annotated aliases for handlers that need the guarded value
AdminActor = Annotated[Actor, Depends(require_admin())]
ManagerActor = Annotated[Actor, Depends(require_manager())]
