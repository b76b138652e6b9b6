"""Team API routes.

Every team route runs inside an organization scope, named by the
organization header.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from taskhub.core.auth.dependencies import CurrentActor, get_current_actor
from taskhub.core.permissions.guards import (
    require_org_manager,
    require_organization,
    require_team_leader,
)
from taskhub.core.tenancy.scope import TenantScope
from taskhub.modules.teams.schemas import (
    TeamCreate,
    TeamMemberCreate,
    TeamMemberResponse,
    TeamResponse,
    TeamUpdate,
)
from taskhub.modules.teams.services import TeamSvc


router = APIRouter(
    prefix="/teams",
    tags=["teams"],
    dependencies=[Depends(get_current_actor)],
)

OrgScope = Annotated[TenantScope, Depends(require_organization())]
ManagerScope = Annotated[TenantScope, Depends(require_org_manager())]


@router.get("", response_model=list[TeamResponse], summary="List teams")
async def list_teams(scope: OrgScope, service: TeamSvc) -> list[TeamResponse]:
    teams = await service.list_teams(scope)
    return [TeamResponse.model_validate(t) for t in teams]


@router.post(
    "",
    response_model=TeamResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a team",
)
async def create_team(
    data: TeamCreate,
    scope: OrgScope,
    actor: CurrentActor,
    service: TeamSvc,
) -> TeamResponse:
    """Create a team. The caller becomes its leader."""
    team = await service.create_team(scope, actor, data)
    return TeamResponse.model_validate(team)


@router.get("/{team_id}", response_model=TeamResponse, summary="Get a team")
async def get_team(team_id: UUID, scope: OrgScope, service: TeamSvc) -> TeamResponse:
    team = await service.get_team(scope, team_id)
    return TeamResponse.model_validate(team)


@router.put(
    "/{team_id}",
    response_model=TeamResponse,
    summary="Update a team",
    dependencies=[Depends(require_team_leader())],
)
async def update_team(
    team_id: str,
    data: TeamUpdate,
    scope: OrgScope,
    actor: CurrentActor,
    service: TeamSvc,
) -> TeamResponse:
    """Update a team. Team leaders only."""
    team = await service.update_team(scope, UUID(team_id), actor, data)
    return TeamResponse.model_validate(team)


@router.delete(
    "/{team_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a team",
)
async def delete_team(
    team_id: UUID,
    scope: ManagerScope,
    actor: CurrentActor,
    service: TeamSvc,
) -> None:
    """Delete a team. Organization managers and above only."""
    await service.delete_team(scope, team_id, actor)


@router.get(
    "/{team_id}/members",
    response_model=list[TeamMemberResponse],
    summary="List team members",
)
async def list_team_members(
    team_id: UUID,
    scope: OrgScope,
    service: TeamSvc,
) -> list[TeamMemberResponse]:
    memberships = await service.list_members(scope, team_id)
    return [TeamMemberResponse.model_validate(m) for m in memberships]


@router.post(
    "/{team_id}/members",
    response_model=TeamMemberResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a team member",
    dependencies=[Depends(require_team_leader())],
)
async def add_team_member(
    team_id: str,
    data: TeamMemberCreate,
    scope: OrgScope,
    actor: CurrentActor,
    service: TeamSvc,
) -> TeamMemberResponse:
    """Add a member. Team leaders only."""
    membership = await service.add_member(scope, UUID(team_id), actor, data)
    return TeamMemberResponse.model_validate(membership)


@router.delete(
    "/{team_id}/members/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a team member",
    dependencies=[Depends(require_team_leader())],
)
async def remove_team_member(
    team_id: str,
    user_id: UUID,
    scope: OrgScope,
    actor: CurrentActor,
    service: TeamSvc,
) -> None:
    """Remove a member. Team leaders only."""
    await service.remove_member(scope, UUID(team_id), actor, user_id)
