"""Application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskhub import __version__
from taskhub.api import api_router
from taskhub.config import Settings, get_settings
from taskhub.core.database import Database
from taskhub.core.errors import register_exception_handlers
from taskhub.core.logging import (
    REQUEST_ID_HEADER,
    RequestContextMiddleware,
    configure_logging,
)


logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
        organization_header=settings.organization_header,
    )

    yield

    await app.state.database.dispose()
    logger.info("application_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API.

    The database handle lives on ``app.state.database`` and is created here,
    so tests can build an app from their own settings without touching a
    module-level engine.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    docs = not settings.is_production
    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant task management API",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
    )
    app.state.settings = settings
    app.state.database = Database.from_settings(settings)

    # Starlette runs the last added middleware first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            REQUEST_ID_HEADER,
            settings.organization_header,
        ],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app
