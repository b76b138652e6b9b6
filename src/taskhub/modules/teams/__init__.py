"""Teams module - groups of users inside an organization."""

from taskhub.modules.teams.routes import router


__all__ = ["router"]
