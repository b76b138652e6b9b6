"""Problem Details (RFC 7807) responses.

Every error leaving the API has the same body shape. Denials from guards
and services keep their fixed message in ``detail``; the stable slug is the
last segment of ``type``.
"""

from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from taskhub.config import get_app_settings
from taskhub.core.errors.exceptions import AppException


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


class FieldError(BaseModel):
    field: str
    message: str
    type: str | None = None


class ProblemDetail(BaseModel):
    """Problem Details body, with the request id and tenant when known."""

    model_config = ConfigDict(extra="allow")

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[FieldError] | None = None
    request_id: str | None = None
    organization_id: str | None = None


def _problem(
    request: Request,
    *,
    status_code: int,
    error_code: str,
    title: str,
    detail: str,
    errors: list[FieldError] | None = None,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    scope = getattr(request.state, "tenant_scope", None)
    body = ProblemDetail(
        type=f"{get_app_settings(request).api_docs_base_url}/errors/{error_code}",
        title=title,
        status=status_code,
        detail=detail,
        instance=request.url.path,
        errors=errors,
        request_id=getattr(request.state, "request_id", None),
        organization_id=str(scope.organization_id) if scope else None,
    ).model_dump(exclude_none=True)

    # Reserved members always win over exception details
    for key, value in (extra or {}).items():
        body.setdefault(key, value)

    return JSONResponse(status_code=status_code, content=body)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    log = logger.warning if exc.status_code >= 500 else logger.info
    log(
        "request_rejected",
        error_code=exc.error_code,
        status_code=exc.status_code,
        path=request.url.path,
    )
    return _problem(
        request,
        status_code=exc.status_code,
        error_code=exc.error_code,
        title=exc.title,
        detail=exc.message,
        extra=exc.details,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 with one entry per invalid field; the ``body`` prefix is dropped."""
    errors = [
        FieldError(
            field=".".join(str(p) for p in err.get("loc", ()) if p != "body")
            or "unknown",
            message=err.get("msg", "Invalid value"),
            type=err.get("type"),
        )
        for err in exc.errors()
    ]
    logger.info("validation_error", path=request.url.path, error_count=len(errors))

    return _problem(
        request,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        error_code="validation_error",
        title="Validation Error",
        detail="Request validation failed",
        errors=errors,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Membership store and database failures end up here, unretried."""
    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return _problem(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code=AppException.error_code,
        title=AppException.title,
        detail=AppException.message,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast("ExceptionHandler", validation_exception_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
