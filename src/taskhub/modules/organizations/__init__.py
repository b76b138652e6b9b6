"""Organizations module - tenants and their memberships."""

from taskhub.modules.organizations.routes import router


__all__ = ["router"]
