"""Tasks module - personal and organization tasks."""

from taskhub.modules.tasks.routes import router


__all__ = ["router"]
