"""Organization API routes.

Routes under ``/organizations/{org_id}`` resolve their tenant scope from
the path. An organization header naming a different organization is
rejected.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from taskhub.core.auth.dependencies import CurrentActor, get_current_actor
from taskhub.core.constants import MSG_INVALID_ORGANIZATION_ID, MSG_ORGANIZATION_MISMATCH
from taskhub.core.errors import BadRequestError
from taskhub.core.permissions.guards import (
    require_org_admin,
    require_org_manager,
    require_org_role,
)
from taskhub.core.permissions.roles import OrgRole
from taskhub.core.tenancy.scope import TenantScope, parse_identifier
from taskhub.modules.organizations.schemas import (
    MembershipCreate,
    MembershipResponse,
    OrganizationCreate,
    OrganizationResponse,
)
from taskhub.modules.organizations.services import OrganizationSvc


router = APIRouter(
    prefix="/organizations",
    tags=["organizations"],
    dependencies=[Depends(get_current_actor)],
)


def _path_organization(
    guard: Callable[..., TenantScope],
) -> Callable[..., Awaitable[TenantScope]]:
    """Wrap an organization guard so the scope must match ``org_id``."""

    async def dependency(
        org_id: str,
        scope: Annotated[TenantScope, Depends(guard)],
    ) -> TenantScope:
        if parse_identifier(org_id, MSG_INVALID_ORGANIZATION_ID) != scope.organization_id:
            raise BadRequestError(
                MSG_ORGANIZATION_MISMATCH,
                error_code="organization_mismatch",
                details={"organization_id": org_id},
            )
        return scope

    return dependency


MemberScope = Annotated[
    TenantScope, Depends(_path_organization(require_org_role(OrgRole.MEMBER)))
]
ManagerScope = Annotated[TenantScope, Depends(_path_organization(require_org_manager()))]
AdminScope = Annotated[TenantScope, Depends(_path_organization(require_org_admin()))]


@router.post(
    "",
    response_model=OrganizationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an organization",
)
async def create_organization(
    data: OrganizationCreate,
    actor: CurrentActor,
    service: OrganizationSvc,
) -> OrganizationResponse:
    """Create an organization. The caller becomes its super admin."""
    organization = await service.create_organization(actor, data)
    return OrganizationResponse.model_validate(organization)


@router.get("", response_model=list[OrganizationResponse], summary="My organizations")
async def list_organizations(
    actor: CurrentActor,
    service: OrganizationSvc,
) -> list[OrganizationResponse]:
    organizations = await service.list_for_actor(actor)
    return [OrganizationResponse.model_validate(o) for o in organizations]


@router.get("/{org_id}", response_model=OrganizationResponse, summary="Get an organization")
async def get_organization(
    org_id: str,
    scope: MemberScope,
    service: OrganizationSvc,
) -> OrganizationResponse:
    """Get an organization. Members only."""
    organization = await service.get_organization(scope)
    return OrganizationResponse.model_validate(organization)


@router.get(
    "/{org_id}/members",
    response_model=list[MembershipResponse],
    summary="List organization members",
)
async def list_members(
    org_id: str,
    scope: MemberScope,
    service: OrganizationSvc,
) -> list[MembershipResponse]:
    memberships = await service.list_members(scope)
    return [MembershipResponse.model_validate(m) for m in memberships]


@router.post(
    "/{org_id}/members",
    response_model=MembershipResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an organization member",
)
async def add_member(
    org_id: str,
    data: MembershipCreate,
    scope: ManagerScope,
    actor: CurrentActor,
    service: OrganizationSvc,
) -> MembershipResponse:
    """Add a member. Organization managers and above only."""
    membership = await service.add_member(scope, actor, data)
    return MembershipResponse.model_validate(membership)


@router.delete(
    "/{org_id}/members/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove an organization member",
)
async def remove_member(
    org_id: str,
    user_id: UUID,
    scope: AdminScope,
    actor: CurrentActor,
    service: OrganizationSvc,
) -> None:
    """Remove a member. Organization super admins only."""
    await service.remove_member(scope, actor, user_id)
