"""Per-request log context.

``RequestContextMiddleware`` gives every request an id (taken from the
``X-Request-ID`` header when the client sends one), binds it to the
structlog context and logs one completion event per request. The user and
organization ids are picked up from ``request.state`` after the handler
ran, since the auth and tenancy dependencies set them there.
"""

import time
import uuid
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp


REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger()


class RequestContextMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, quiet_paths: tuple[str, ...] = ()) -> None:
        super().__init__(app)
        self.quiet_paths = quiet_paths or ("/health", "/docs", "/redoc", "/openapi.json")

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request_failed",
                method=request.method,
                path=request.url.path,
                duration_ms=_elapsed_ms(started),
            )
            raise
        finally:
            structlog.contextvars.unbind_contextvars(
                "request_id", "user_id", "organization_id"
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        if not request.url.path.startswith(self.quiet_paths):
            _log_completion(request, response, request_id, _elapsed_ms(started))
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _log_completion(
    request: Request, response: Response, request_id: str, duration_ms: float
) -> None:
    fields: dict[str, Any] = {
        "method": request.method,
        "path": request.url.path,
        "status_code": response.status_code,
        "duration_ms": duration_ms,
        "request_id": request_id,
    }
    for key in ("user_id", "organization_id"):
        value = getattr(request.state, key, None)
        if value is not None:
            fields[key] = str(value)

    if response.status_code >= 500:
        logger.error("request_completed", **fields)
    elif response.status_code >= 400:
        logger.warning("request_completed", **fields)
    else:
        logger.info("request_completed", **fields)
