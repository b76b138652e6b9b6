"""Domain exceptions.

Services and guards raise these; the handlers in ``handlers.py`` turn them
into Problem Details bodies. Access-control denials only ever surface as
``BadRequestError`` (malformed identifiers), ``UnauthorizedError`` or
``ForbiddenError``.
"""

from typing import Any
from uuid import UUID


class AppException(Exception):
    """Base class for errors that map to a client response.

    Attributes:
        message: Shown to the client as the problem ``detail``
        error_code: Stable slug, also the last segment of the problem ``type``
        title: Short summary shared by every error of the class
        status_code: HTTP status of the response
        details: Extra members merged into the problem body
    """

    status_code: int = 500
    title: str = "Internal Server Error"
    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        if message:
            self.message = message
        if error_code:
            self.error_code = error_code
        self.details = dict(details or {})
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.error_code!r}, {self.message!r})"


class BadRequestError(AppException):
    """Malformed identifiers, missing organization context, invalid references."""

    status_code = 400
    title = "Bad Request"
    message = "Bad request"
    error_code = "bad_request"


class UnauthorizedError(AppException):
    """No actor could be established for the request."""

    status_code = 401
    title = "Unauthorized"
    message = "Authentication required"
    error_code = "unauthorized"


class ForbiddenError(AppException):
    """The actor is known but the role, membership or ownership check failed."""

    status_code = 403
    title = "Forbidden"
    message = "Access forbidden"
    error_code = "forbidden"


class NotFoundError(AppException):
    """A task, team, organization, user or membership does not exist.

    The message defaults to the resource name, so
    ``NotFoundError("task", task_id)`` reads "Task not found".
    """

    status_code = 404
    title = "Not Found"
    error_code = "not_found"

    def __init__(
        self,
        resource: str,
        resource_id: UUID | str | None = None,
        *,
        message: str | None = None,
    ) -> None:
        details: dict[str, Any] = {"resource": resource}
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        default = f"{resource.replace('_', ' ').capitalize()} not found"
        super().__init__(message or default, details=details)


class ConflictError(AppException):
    """A unique slug, name, email or membership pair is already taken."""

    status_code = 409
    title = "Conflict"
    message = "Resource conflict"
    error_code = "conflict"
