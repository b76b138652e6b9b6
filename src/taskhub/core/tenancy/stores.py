"""Membership store contracts.

The scope resolver and the team-leader guard read memberships through
these protocols. Concrete stores are the SQLAlchemy repositories in the
organizations and teams modules; they are built per request from the
request's database session.
"""

from typing import Annotated, Protocol
from uuid import UUID

from fastapi import Depends

from taskhub.core.database import DBSession
from taskhub.core.permissions.roles import OrgRole, TeamRole


class MembershipRecord(Protocol):
    """What the resolver needs from an organization membership."""

    organization_id: UUID
    role: OrgRole


class TeamMembershipRecord(Protocol):
    """What the team-leader guard needs from a team membership."""

    team_id: UUID
    role: TeamRole


class MembershipStore(Protocol):
    async def find_membership(
        self, user_id: UUID, organization_id: UUID
    ) -> MembershipRecord | None: ...


class TeamMembershipStore(Protocol):
    async def find_team_membership(
        self, user_id: UUID, team_id: UUID
    ) -> TeamMembershipRecord | None: ...


def get_membership_store(db: DBSession) -> MembershipStore:
    """Build the membership store for this request."""
    from taskhub.modules.organizations.repos import MembershipRepository  # noqa: PLC0415

    return MembershipRepository(db)


def get_team_membership_store(db: DBSession) -> TeamMembershipStore:
    """Build the team membership store for this request."""
    from taskhub.modules.teams.repos import TeamMembershipRepository  # noqa: PLC0415

    return TeamMembershipRepository(db)


MembershipStoreDep = Annotated[MembershipStore, Depends(get_membership_store)]
TeamMembershipStoreDep = Annotated[
    TeamMembershipStore, Depends(get_team_membership_store)
]
