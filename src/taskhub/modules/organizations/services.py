"""Organization service for business logic."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from taskhub.core.auth.schemas import Actor
from taskhub.core.constants import MSG_INSUFFICIENT_ORG_PERMISSIONS
from taskhub.core.errors import ConflictError, ForbiddenError, NotFoundError
from taskhub.core.permissions.roles import OrgRole, is_org_role_at_least
from taskhub.core.tenancy.scope import TenantScope
from taskhub.modules.organizations.models import Membership, Organization
from taskhub.modules.organizations.repos import MembershipRepo, OrganizationRepo
from taskhub.modules.organizations.schemas import MembershipCreate, OrganizationCreate


logger = structlog.get_logger()


class OrganizationService:
    """Service for organizations and their memberships."""

    def __init__(self, repo: OrganizationRepo, memberships: MembershipRepo) -> None:
        self.repo = repo
        self.memberships = memberships

    async def create_organization(
        self, actor: Actor, data: OrganizationCreate
    ) -> Organization:
        """Create an organization owned by the actor.

        The creator becomes the organization's ``SUPER_ADMIN``.

        Raises:
            ConflictError: If the slug is already taken
        """
        if await self.repo.get_by_slug(data.slug):
            raise ConflictError(
                "Organization slug already taken",
                error_code="slug_exists",
                details={"slug": data.slug},
            )

        organization = await self.repo.create(
            Organization(name=data.name, slug=data.slug)
        )
        await self.memberships.create(
            Membership(
                user_id=actor.id,
                organization_id=organization.id,
                role=OrgRole.SUPER_ADMIN,
            )
        )

        logger.info(
            "organization_created",
            organization_id=str(organization.id),
            slug=organization.slug,
            created_by=str(actor.id),
        )
        return organization

    async def list_for_actor(self, actor: Actor) -> list[Organization]:
        return await self.repo.list_for_user(actor.id)

    async def get_organization(self, scope: TenantScope) -> Organization:
        """Get the organization of a resolved tenant scope.

        Raises:
            NotFoundError: If the organization no longer exists
        """
        organization = await self.repo.get_by_id(scope.organization_id)
        if not organization:
            raise NotFoundError("organization", scope.organization_id)
        return organization

    async def list_members(self, scope: TenantScope) -> list[Membership]:
        return await self.memberships.list_for_organization(scope.organization_id)

    async def add_member(
        self, scope: TenantScope, actor: Actor, data: MembershipCreate
    ) -> Membership:
        """Add a user to the scoped organization.

        A member cannot be granted a role above the granting member's own.

        Raises:
            ForbiddenError: If the requested role outranks the caller's
            ConflictError: If the user is already a member
        """
        if not is_org_role_at_least(scope.role, data.role):
            raise ForbiddenError(
                MSG_INSUFFICIENT_ORG_PERMISSIONS,
                error_code="insufficient_org_role",
                details={"required_org_role": str(data.role)},
            )

        existing = await self.memberships.find_membership(
            data.user_id, scope.organization_id
        )
        if existing:
            raise ConflictError(
                "User is already a member of this organization",
                error_code="already_member",
            )

        membership = await self.memberships.create(
            Membership(
                user_id=data.user_id,
                organization_id=scope.organization_id,
                role=data.role,
            )
        )

        logger.info(
            "organization_member_added",
            organization_id=str(scope.organization_id),
            user_id=str(data.user_id),
            role=str(data.role),
            added_by=str(actor.id),
        )
        return membership

    async def remove_member(self, scope: TenantScope, actor: Actor, user_id: UUID) -> None:
        """Remove a user from the scoped organization.

        Raises:
            NotFoundError: If the user is not a member
        """
        membership = await self.memberships.find_membership(
            user_id, scope.organization_id
        )
        if not membership:
            raise NotFoundError("membership", user_id)

        await self.memberships.delete(membership)

        logger.info(
            "organization_member_removed",
            organization_id=str(scope.organization_id),
            user_id=str(user_id),
            removed_by=str(actor.id),
        )


OrganizationSvc = Annotated[OrganizationService, Depends(OrganizationService)]
