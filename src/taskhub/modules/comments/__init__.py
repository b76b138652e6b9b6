"""Comments module - discussion on tasks."""

from taskhub.modules.comments.routes import router


__all__ = ["router"]
