"""Users module - accounts and profiles."""

from taskhub.modules.users.routes import router


__all__ = ["router"]
