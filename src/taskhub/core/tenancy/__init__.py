"""Tenant context: scope resolution and membership store contracts."""

from taskhub.core.tenancy.scope import TenantScope, TenantScopeResolver, parse_identifier
from taskhub.core.tenancy.stores import (
    MembershipStore,
    TeamMembershipStore,
    get_membership_store,
    get_team_membership_store,
)


__all__ = [
    "MembershipStore",
    "TeamMembershipStore",
    "TenantScope",
    "TenantScopeResolver",
    "get_membership_store",
    "get_team_membership_store",
    "parse_identifier",
]
