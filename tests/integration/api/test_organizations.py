"""Integration tests for organization endpoints."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from taskhub.core.permissions.roles import OrgRole, Role
from taskhub.modules.organizations.repos import MembershipRepository, OrganizationRepository
from tests.factories.actor import ActorFactory, OrganizationCreateFactory
from tests.factories.models import make_membership, make_organization, persist


pytestmark = pytest.mark.integration


@pytest.fixture
def org_repo(app: FastAPI) -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = persist
    repo.get_by_slug.return_value = None
    app.dependency_overrides[OrganizationRepository] = lambda: repo
    return repo


@pytest.fixture
def member_repo(app: FastAPI) -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = persist
    repo.find_membership.return_value = None
    app.dependency_overrides[MembershipRepository] = lambda: repo
    return repo


class TestCreateOrganization:
    async def test_creator_becomes_super_admin(
        self, client: AsyncClient, auth_state, org_repo, member_repo
    ):
        actor = ActorFactory.build()
        auth_state.actor = actor
        payload = OrganizationCreateFactory.build()

        response = await client.post("/api/v1/organizations", json=payload.model_dump())

        assert response.status_code == 201
        assert response.json()["slug"] == payload.slug
        membership = member_repo.create.await_args.args[0]
        assert membership.user_id == actor.id
        assert membership.role == OrgRole.SUPER_ADMIN

    async def test_duplicate_slug(self, client, auth_state, org_repo, member_repo):
        auth_state.actor = ActorFactory.build()
        org_repo.get_by_slug.return_value = make_organization(slug="acme")

        response = await client.post(
            "/api/v1/organizations", json={"name": "Acme", "slug": "acme"}
        )

        assert response.status_code == 409
        member_repo.create.assert_not_awaited()

    async def test_invalid_slug(self, client, auth_state, org_repo, member_repo):
        auth_state.actor = ActorFactory.build()

        response = await client.post(
            "/api/v1/organizations", json={"name": "Acme", "slug": "Not A Slug"}
        )

        assert response.status_code == 422

    async def test_anonymous(self, client, org_repo, member_repo):
        response = await client.post(
            "/api/v1/organizations", json={"name": "Acme", "slug": "acme"}
        )

        assert response.status_code == 401


class TestGetOrganization:
    async def test_member_reads(self, client, auth_state, membership_store, org_repo, member_repo):
        actor = ActorFactory.build()
        auth_state.actor = actor
        organization = make_organization()
        membership_store.add(actor.id, organization.id, OrgRole.MEMBER)
        org_repo.get_by_id.return_value = organization

        response = await client.get(f"/api/v1/organizations/{organization.id}")

        assert response.status_code == 200
        assert response.json()["id"] == str(organization.id)

    async def test_non_member_forbidden(self, client, auth_state, org_repo, member_repo):
        auth_state.actor = ActorFactory.build(role=Role.SUPER_ADMIN)

        response = await client.get(f"/api/v1/organizations/{uuid4()}")

        assert response.status_code == 403
        assert response.json()["detail"] == "You are not a member of this organization"
        org_repo.get_by_id.assert_not_awaited()

    async def test_malformed_id(self, client, auth_state, org_repo, member_repo):
        auth_state.actor = ActorFactory.build()

        response = await client.get("/api/v1/organizations/acme")

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid organization identifier"

    async def test_lists_own_organizations(self, client, auth_state, org_repo, member_repo):
        actor = ActorFactory.build()
        auth_state.actor = actor
        org_repo.list_for_user.return_value = [make_organization(), make_organization()]

        response = await client.get("/api/v1/organizations")

        assert response.status_code == 200
        assert len(response.json()) == 2
        org_repo.list_for_user.assert_awaited_once_with(actor.id)


class TestMembers:
    async def test_member_cannot_add(self, client, auth_state, membership_store, member_repo):
        actor = ActorFactory.build()
        auth_state.actor = actor
        org_id = uuid4()
        membership_store.add(actor.id, org_id, OrgRole.MEMBER)

        response = await client.post(
            f"/api/v1/organizations/{org_id}/members", json={"user_id": str(uuid4())}
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Insufficient organization permissions"

    async def test_manager_adds_member(self, client, auth_state, membership_store, member_repo):
        actor = ActorFactory.build()
        auth_state.actor = actor
        org_id = uuid4()
        membership_store.add(actor.id, org_id, OrgRole.MANAGER)
        new_user = uuid4()

        response = await client.post(
            f"/api/v1/organizations/{org_id}/members", json={"user_id": str(new_user)}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["user_id"] == str(new_user)
        assert body["role"] == "MEMBER"

    async def test_manager_cannot_grant_super_admin(
        self, client, auth_state, membership_store, member_repo
    ):
        actor = ActorFactory.build()
        auth_state.actor = actor
        org_id = uuid4()
        membership_store.add(actor.id, org_id, OrgRole.MANAGER)

        response = await client.post(
            f"/api/v1/organizations/{org_id}/members",
            json={"user_id": str(uuid4()), "role": "SUPER_ADMIN"},
        )

        assert response.status_code == 403
        member_repo.create.assert_not_awaited()

    async def test_duplicate_member(self, client, auth_state, membership_store, member_repo):
        actor = ActorFactory.build()
        auth_state.actor = actor
        org_id = uuid4()
        membership_store.add(actor.id, org_id, OrgRole.SUPER_ADMIN)
        existing = uuid4()
        member_repo.find_membership.return_value = make_membership(
            existing, org_id, OrgRole.MEMBER
        )

        response = await client.post(
            f"/api/v1/organizations/{org_id}/members", json={"user_id": str(existing)}
        )

        assert response.status_code == 409

    async def test_manager_cannot_remove(self, client, auth_state, membership_store, member_repo):
        actor = ActorFactory.build()
        auth_state.actor = actor
        org_id = uuid4()
        membership_store.add(actor.id, org_id, OrgRole.MANAGER)

        response = await client.delete(f"/api/v1/organizations/{org_id}/members/{uuid4()}")

        assert response.status_code == 403
        member_repo.delete.assert_not_awaited()

    async def test_super_admin_removes(self, client, auth_state, membership_store, member_repo):
        actor = ActorFactory.build()
        auth_state.actor = actor
        org_id = uuid4()
        membership_store.add(actor.id, org_id, OrgRole.SUPER_ADMIN)
        target = make_membership(uuid4(), org_id, OrgRole.MEMBER)
        member_repo.find_membership.return_value = target

        response = await client.delete(
            f"/api/v1/organizations/{org_id}/members/{target.user_id}"
        )

        assert response.status_code == 204
        member_repo.delete.assert_awaited_once_with(target)


class TestPathAndHeader:
    async def test_header_naming_other_organization_rejected(
        self, client, auth_state, membership_store, org_repo, member_repo
    ):
        actor = ActorFactory.build()
        auth_state.actor = actor
        path_org, header_org = uuid4(), uuid4()
        membership_store.add(actor.id, path_org, OrgRole.MEMBER)
        membership_store.add(actor.id, header_org, OrgRole.SUPER_ADMIN)

        response = await client.get(
            f"/api/v1/organizations/{path_org}/members",
            headers={"X-Organization-Id": str(header_org)},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "Organization header does not match the requested organization"
        )
        member_repo.list_for_organization.assert_not_awaited()

    async def test_matching_header_accepted(
        self, client, auth_state, membership_store, org_repo, member_repo
    ):
        actor = ActorFactory.build()
        auth_state.actor = actor
        organization = make_organization()
        membership_store.add(actor.id, organization.id, OrgRole.MEMBER)
        org_repo.get_by_id.return_value = organization

        response = await client.get(
            f"/api/v1/organizations/{organization.id}",
            headers={"X-Organization-Id": str(organization.id).upper()},
        )

        assert response.status_code == 200
        assert response.json()["id"] == str(organization.id)
