"""Team service for business logic."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from taskhub.core.auth.schemas import Actor
from taskhub.core.errors import BadRequestError, ConflictError, NotFoundError
from taskhub.core.permissions.roles import TeamRole
from taskhub.core.tenancy.scope import TenantScope
from taskhub.modules.organizations.repos import MembershipRepo
from taskhub.modules.teams.models import Team, TeamMembership
from taskhub.modules.teams.repos import TeamMembershipRepo, TeamRepo
from taskhub.modules.teams.schemas import TeamCreate, TeamMemberCreate, TeamUpdate


logger = structlog.get_logger()


class TeamService:
    """Service for teams inside the scoped organization."""

    def __init__(
        self,
        repo: TeamRepo,
        members: TeamMembershipRepo,
        org_members: MembershipRepo,
    ) -> None:
        self.repo = repo
        self.members = members
        self.org_members = org_members

    async def create_team(self, scope: TenantScope, actor: Actor, data: TeamCreate) -> Team:
        """Create a team led by the actor.

        Raises:
            ConflictError: If a team with the same name (ignoring case) exists
        """
        if await self.repo.get_by_name(data.name, scope.organization_id):
            raise ConflictError(
                "Team with this name already exists in the organization",
                error_code="team_exists",
                details={"name": data.name},
            )

        team = await self.repo.create(
            Team(
                name=data.name,
                description=data.description,
                organization_id=scope.organization_id,
            )
        )
        await self.members.create(
            TeamMembership(user_id=actor.id, team_id=team.id, role=TeamRole.LEADER)
        )

        logger.info(
            "team_created",
            team_id=str(team.id),
            organization_id=str(scope.organization_id),
            created_by=str(actor.id),
        )
        return team

    async def get_team(self, scope: TenantScope, team_id: UUID) -> Team:
        """Get a team of the scoped organization.

        Raises:
            NotFoundError: If the team does not exist in this organization
        """
        team = await self.repo.get_by_id(team_id, scope.organization_id)
        if not team:
            raise NotFoundError("team", team_id)
        return team

    async def list_teams(self, scope: TenantScope) -> list[Team]:
        return await self.repo.list_for_organization(scope.organization_id)

    async def update_team(
        self, scope: TenantScope, team_id: UUID, actor: Actor, data: TeamUpdate
    ) -> Team:
        """Rename or redescribe a team.

        Raises:
            NotFoundError: If the team does not exist in this organization
            ConflictError: If another team already uses the new name
        """
        team = await self.get_team(scope, team_id)
        changes = data.model_dump(exclude_unset=True)

        name = changes.pop("name", None)
        if name is not None and name.lower() != team.name.lower():
            existing = await self.repo.get_by_name(name, scope.organization_id)
            if existing and existing.id != team.id:
                raise ConflictError(
                    "Team with this name already exists in the organization",
                    error_code="team_exists",
                    details={"name": name},
                )
        if name is not None:
            team.name = name
        if "description" in changes:
            team.description = changes["description"]

        team = await self.repo.update(team)
        logger.info("team_updated", team_id=str(team.id), updated_by=str(actor.id))
        return team

    async def delete_team(self, scope: TenantScope, team_id: UUID, actor: Actor) -> None:
        """Delete a team with its memberships. Its tasks lose their team."""
        team = await self.get_team(scope, team_id)
        await self.repo.delete(team)

        logger.info(
            "team_deleted",
            team_id=str(team_id),
            organization_id=str(scope.organization_id),
            deleted_by=str(actor.id),
        )

    async def list_members(self, scope: TenantScope, team_id: UUID) -> list[TeamMembership]:
        team = await self.get_team(scope, team_id)
        return await self.members.list_for_team(team.id)

    async def add_member(
        self,
        scope: TenantScope,
        team_id: UUID,
        actor: Actor,
        data: TeamMemberCreate,
    ) -> TeamMembership:
        """Add an organization member to a team.

        Raises:
            NotFoundError: If the team does not exist in this organization
            BadRequestError: If the user is not a member of the organization
            ConflictError: If the user is already on the team
        """
        team = await self.get_team(scope, team_id)

        if not await self.org_members.find_membership(data.user_id, scope.organization_id):
            raise BadRequestError(
                "User is not a member of the organization",
                error_code="not_organization_member",
            )

        if await self.members.find_team_membership(data.user_id, team.id):
            raise ConflictError(
                "User is already a member of this team",
                error_code="already_team_member",
            )

        membership = await self.members.create(
            TeamMembership(user_id=data.user_id, team_id=team.id, role=data.role)
        )

        logger.info(
            "team_member_added",
            team_id=str(team.id),
            user_id=str(data.user_id),
            role=str(data.role),
            added_by=str(actor.id),
        )
        return membership

    async def remove_member(
        self, scope: TenantScope, team_id: UUID, actor: Actor, user_id: UUID
    ) -> None:
        """Remove a user from a team.

        Raises:
            NotFoundError: If the team or the membership does not exist
        """
        team = await self.get_team(scope, team_id)

        membership = await self.members.find_team_membership(user_id, team.id)
        if not membership:
            raise NotFoundError(
                "team_membership",
                user_id,
                message="User is not a member of this team",
            )

        await self.members.delete(membership)

        logger.info(
            "team_member_removed",
            team_id=str(team.id),
            user_id=str(user_id),
            removed_by=str(actor.id),
        )


TeamSvc = Annotated[TeamService, Depends(TeamService)]
