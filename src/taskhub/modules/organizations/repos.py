"""Organization and membership repositories."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from taskhub.core.database import DBSession
from taskhub.modules.organizations.models import Membership, Organization


class OrganizationRepository:
    """Repository for Organization database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, organization: Organization) -> Organization:
        self.session.add(organization)
        await self.session.flush()
        await self.session.refresh(organization)
        return organization

    async def get_by_id(self, organization_id: UUID) -> Organization | None:
        return await self.session.get(Organization, organization_id)

    async def get_by_slug(self, slug: str) -> Organization | None:
        stmt = select(Organization).where(Organization.slug == slug)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: UUID) -> list[Organization]:
        """List the organizations a user holds a membership in."""
        stmt = (
            select(Organization)
            .join(Membership, Membership.organization_id == Organization.id)
            .where(Membership.user_id == user_id)
            .order_by(Organization.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class MembershipRepository:
    """Repository for Membership database operations.

    Serves as the membership store of the tenant scope resolver.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def find_membership(
        self, user_id: UUID, organization_id: UUID
    ) -> Membership | None:
        """Point read of the membership for (user, organization)."""
        stmt = select(Membership).where(
            Membership.user_id == user_id,
            Membership.organization_id == organization_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_organization(self, organization_id: UUID) -> list[Membership]:
        stmt = (
            select(Membership)
            .where(Membership.organization_id == organization_id)
            .order_by(Membership.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, membership: Membership) -> Membership:
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def delete(self, membership: Membership) -> None:
        await self.session.delete(membership)
        await self.session.flush()


OrganizationRepo = Annotated[OrganizationRepository, Depends(OrganizationRepository)]
MembershipRepo = Annotated[MembershipRepository, Depends(MembershipRepository)]
