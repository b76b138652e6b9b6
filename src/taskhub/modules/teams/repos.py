"""Team and team membership repositories."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, select

from taskhub.core.database import DBSession
from taskhub.modules.teams.models import Team, TeamMembership


class TeamRepository:
    """Repository for Team database operations.

    Every read is filtered by organization.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, team: Team) -> Team:
        self.session.add(team)
        await self.session.flush()
        await self.session.refresh(team)
        return team

    async def get_by_id(self, team_id: UUID, organization_id: UUID) -> Team | None:
        stmt = select(Team).where(
            Team.id == team_id,
            Team.organization_id == organization_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str, organization_id: UUID) -> Team | None:
        """Case-insensitive lookup of a team name within an organization."""
        stmt = select(Team).where(
            Team.organization_id == organization_id,
            func.lower(Team.name) == name.lower(),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_organization(self, organization_id: UUID) -> list[Team]:
        stmt = (
            select(Team)
            .where(Team.organization_id == organization_id)
            .order_by(Team.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, team: Team) -> Team:
        await self.session.flush()
        await self.session.refresh(team)
        return team

    async def delete(self, team: Team) -> None:
        await self.session.delete(team)
        await self.session.flush()


class TeamMembershipRepository:
    """Repository for TeamMembership database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def find_team_membership(
        self, user_id: UUID, team_id: UUID
    ) -> TeamMembership | None:
        stmt = select(TeamMembership).where(
            TeamMembership.user_id == user_id,
            TeamMembership.team_id == team_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_team(self, team_id: UUID) -> list[TeamMembership]:
        stmt = (
            select(TeamMembership)
            .where(TeamMembership.team_id == team_id)
            .order_by(TeamMembership.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, membership: TeamMembership) -> TeamMembership:
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def delete(self, membership: TeamMembership) -> None:
        await self.session.delete(membership)
        await self.session.flush()


TeamRepo = Annotated[TeamRepository, Depends(TeamRepository)]
TeamMembershipRepo = Annotated[TeamMembershipRepository, Depends(TeamMembershipRepository)]
