"""Unit tests for OrganizationService."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from taskhub.core.errors import ConflictError, ForbiddenError, NotFoundError
from taskhub.core.permissions.roles import OrgRole
from taskhub.core.tenancy import TenantScope
from taskhub.modules.organizations.schemas import MembershipCreate, OrganizationCreate
from taskhub.modules.organizations.services import OrganizationService
from tests.factories.actor import ActorFactory
from tests.factories.models import make_membership, make_organization, persist


pytestmark = pytest.mark.unit


@pytest.fixture
def org_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = persist
    repo.get_by_slug.return_value = None
    return repo


@pytest.fixture
def member_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = persist
    repo.find_membership.return_value = None
    return repo


@pytest.fixture
def service(org_repo, member_repo) -> OrganizationService:
    return OrganizationService(repo=org_repo, memberships=member_repo)


class TestCreateOrganization:
    async def test_creates_with_super_admin_membership(self, service, member_repo):
        actor = ActorFactory.build()

        organization = await service.create_organization(
            actor, OrganizationCreate(name="Acme", slug="acme")
        )

        assert organization.slug == "acme"
        membership = member_repo.create.await_args.args[0]
        assert membership.organization_id == organization.id
        assert membership.role == OrgRole.SUPER_ADMIN

    async def test_duplicate_slug_raises_conflict(self, service, org_repo, member_repo):
        org_repo.get_by_slug.return_value = make_organization(slug="acme")

        with pytest.raises(ConflictError) as exc_info:
            await service.create_organization(
                ActorFactory.build(), OrganizationCreate(name="Acme", slug="acme")
            )

        assert exc_info.value.error_code == "slug_exists"
        org_repo.create.assert_not_awaited()
        member_repo.create.assert_not_awaited()


class TestGetOrganization:
    async def test_missing_organization(self, service, org_repo):
        org_repo.get_by_id.return_value = None
        scope = TenantScope(organization_id=uuid4(), role=OrgRole.MEMBER)

        with pytest.raises(NotFoundError):
            await service.get_organization(scope)


class TestMembers:
    async def test_role_cannot_exceed_granter(self, service, member_repo):
        scope = TenantScope(organization_id=uuid4(), role=OrgRole.MANAGER)

        with pytest.raises(ForbiddenError):
            await service.add_member(
                scope,
                ActorFactory.build(),
                MembershipCreate(user_id=uuid4(), role=OrgRole.SUPER_ADMIN),
            )

        member_repo.create.assert_not_awaited()

    async def test_manager_may_grant_manager(self, service, member_repo):
        scope = TenantScope(organization_id=uuid4(), role=OrgRole.MANAGER)
        user_id = uuid4()

        membership = await service.add_member(
            scope, ActorFactory.build(), MembershipCreate(user_id=user_id, role=OrgRole.MANAGER)
        )

        assert membership.user_id == user_id
        assert membership.organization_id == scope.organization_id

    async def test_remove_missing_member(self, service, member_repo):
        scope = TenantScope(organization_id=uuid4(), role=OrgRole.SUPER_ADMIN)

        with pytest.raises(NotFoundError):
            await service.remove_member(scope, ActorFactory.build(), uuid4())

        member_repo.delete.assert_not_awaited()

    async def test_remove_member(self, service, member_repo):
        scope = TenantScope(organization_id=uuid4(), role=OrgRole.SUPER_ADMIN)
        membership = make_membership(uuid4(), scope.organization_id, OrgRole.MEMBER)
        member_repo.find_membership.return_value = membership

        await service.remove_member(scope, ActorFactory.build(), membership.user_id)

        member_repo.find_membership.assert_awaited_once_with(
            membership.user_id, scope.organization_id
        )
        member_repo.delete.assert_awaited_once_with(membership)
