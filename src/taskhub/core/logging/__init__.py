"""Structured logging setup and request context middleware."""

import logging

import structlog

from taskhub.config import Settings
from taskhub.core.logging.middleware import REQUEST_ID_HEADER, RequestContextMiddleware


def configure_logging(settings: Settings) -> None:
    """Configure structlog once per application.

    Request, user and organization ids bound by the middleware and the
    auth and tenancy dependencies are merged into every event.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.is_production
        else structlog.dev.ConsoleRenderer()
    )
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


__all__ = [
    "REQUEST_ID_HEADER",
    "RequestContextMiddleware",
    "configure_logging",
]
