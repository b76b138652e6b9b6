"""Tenant scope resolution.

A request runs in one of two modes:

- individual mode: no organization identifier was supplied, or no actor
  is authenticated. No scope is attached.
- organization mode: an identifier was supplied by an authenticated actor
  who holds a membership in that organization. The scope carries the
  organization id and the actor's organization role.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from taskhub.core.constants import (
    MSG_INVALID_ORGANIZATION_ID,
    MSG_NOT_ORGANIZATION_MEMBER,
)
from taskhub.core.errors import BadRequestError, ForbiddenError
from taskhub.core.permissions.roles import OrgRole
from taskhub.core.tenancy.stores import MembershipStore


if TYPE_CHECKING:
    from taskhub.core.auth.schemas import Actor


logger = structlog.get_logger()


@dataclass(frozen=True)
class TenantScope:
    """Organization context for one in-flight request."""

    organization_id: UUID
    role: OrgRole


def parse_identifier(value: str, message: str) -> UUID:
    """Parse a client-supplied identifier.

    Raises:
        BadRequestError: If the value is not a UUID
    """
    try:
        return UUID(str(value))
    except ValueError as e:
        raise BadRequestError(
            message,
            error_code="invalid_identifier",
            details={"value": str(value)},
        ) from e


class TenantScopeResolver:
    """Derives the tenant scope of a request from a membership lookup.

    The store is supplied at construction. The resolver only reads from
    it, so resolving the same inputs twice gives the same result.
    """

    def __init__(self, store: MembershipStore) -> None:
        self.store = store

    async def resolve(
        self,
        actor: "Actor | None",
        header_org_id: str | None = None,
        path_org_id: str | None = None,
    ) -> TenantScope | None:
        """Resolve the tenant scope for a request.

        Args:
            actor: The authenticated actor, if any
            header_org_id: Organization id from the request header
            path_org_id: Organization id from the route path

        Returns:
            The scope, or None in individual mode

        Raises:
            BadRequestError: If the identifier is malformed
            ForbiddenError: If the actor is not a member of the organization
        """
        # Header wins over the path parameter
        candidate = header_org_id or path_org_id
        if not candidate:
            return None

        # Anonymous callers pass through without a scope
        if actor is None:
            return None

        organization_id = parse_identifier(candidate, MSG_INVALID_ORGANIZATION_ID)

        membership = await self.store.find_membership(actor.id, organization_id)
        if membership is None:
            logger.warning(
                "access_denied",
                reason="not_organization_member",
                user_id=str(actor.id),
                organization_id=str(organization_id),
            )
            raise ForbiddenError(
                MSG_NOT_ORGANIZATION_MEMBER,
                error_code="not_organization_member",
            )

        return TenantScope(
            organization_id=organization_id,
            role=OrgRole(membership.role),
        )
