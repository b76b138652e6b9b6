"""Repository tests for organizations and memberships."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.core.permissions.roles import OrgRole
from taskhub.modules.organizations.models import Membership, Organization
from taskhub.modules.organizations.repos import MembershipRepository, OrganizationRepository
from taskhub.modules.users.models import User


pytestmark = pytest.mark.database


class TestFindMembership:
    async def test_found(
        self, db: AsyncSession, user: User, organization: Organization, membership: Membership
    ):
        result = await MembershipRepository(db).find_membership(user.id, organization.id)

        assert result is not None
        assert result.id == membership.id
        assert result.role == OrgRole.MANAGER

    async def test_other_organization(
        self,
        db: AsyncSession,
        user: User,
        membership: Membership,
        other_organization: Organization,
    ):
        result = await MembershipRepository(db).find_membership(
            user.id, other_organization.id
        )

        assert result is None

    async def test_other_user(
        self,
        db: AsyncSession,
        other_user: User,
        organization: Organization,
        membership: Membership,
    ):
        result = await MembershipRepository(db).find_membership(other_user.id, organization.id)

        assert result is None

    async def test_unknown_ids(self, db: AsyncSession):
        assert await MembershipRepository(db).find_membership(uuid4(), uuid4()) is None


class TestMembershipConstraints:
    async def test_one_membership_per_user_and_organization(
        self, db: AsyncSession, user: User, organization: Organization, membership: Membership
    ):
        duplicate = Membership(
            user_id=user.id, organization_id=organization.id, role=OrgRole.MEMBER
        )

        with pytest.raises(IntegrityError, match="uq_membership_user_org"):
            await MembershipRepository(db).create(duplicate)

    async def test_same_user_in_two_organizations(
        self,
        db: AsyncSession,
        user: User,
        membership: Membership,
        other_organization: Organization,
    ):
        created = await MembershipRepository(db).create(
            Membership(
                user_id=user.id,
                organization_id=other_organization.id,
                role=OrgRole.MEMBER,
            )
        )

        assert created.id is not None
        assert created.created_at is not None


class TestOrganizationRepository:
    async def test_list_for_user_only_returns_memberships(
        self,
        db: AsyncSession,
        user: User,
        membership: Membership,
        other_organization: Organization,
    ):
        organizations = await OrganizationRepository(db).list_for_user(user.id)

        assert [o.slug for o in organizations] == ["acme"]

    async def test_get_by_slug(self, db: AsyncSession, organization: Organization):
        repo = OrganizationRepository(db)

        assert (await repo.get_by_slug("acme")).id == organization.id
        assert await repo.get_by_slug("initech") is None

    async def test_slug_is_unique(self, db: AsyncSession, organization: Organization):
        with pytest.raises(IntegrityError):
            await OrganizationRepository(db).create(Organization(name="Acme 2", slug="acme"))
