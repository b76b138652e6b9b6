"""FastAPI dependencies for tenant context."""

from typing import Annotated

import structlog
from fastapi import Depends, Request

from taskhub.config import AppSettings
from taskhub.core.auth.dependencies import OptionalActor
from taskhub.core.constants import ORGANIZATION_PATH_PARAM
from taskhub.core.tenancy.scope import TenantScope, TenantScopeResolver
from taskhub.core.tenancy.stores import MembershipStoreDep


async def get_tenant_scope(
    request: Request,
    actor: OptionalActor,
    store: MembershipStoreDep,
    settings: AppSettings,
) -> TenantScope | None:
    """Resolve and attach the tenant scope of the current request.

    The organization id is read from the header named by the app's
    ``organization_header`` setting first, then from the ``org_id`` path
    parameter.
    """
    resolver = TenantScopeResolver(store)
    scope = await resolver.resolve(
        actor,
        header_org_id=request.headers.get(settings.organization_header),
        path_org_id=request.path_params.get(ORGANIZATION_PATH_PARAM),
    )

    request.state.tenant_scope = scope
    if scope is not None:
        request.state.organization_id = scope.organization_id
        structlog.contextvars.bind_contextvars(
            organization_id=str(scope.organization_id),
        )

    return scope


TenantScopeDep = Annotated[TenantScope | None, Depends(get_tenant_scope)]
