"""API routing."""

from taskhub.api.router import api_router


__all__ = ["api_router"]
