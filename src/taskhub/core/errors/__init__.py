"""Domain errors and their Problem Details responses."""

from taskhub.core.errors.exceptions import (
    AppException,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from taskhub.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    "AppException",
    "BadRequestError",
    "ConflictError",
    "FieldError",
    "ForbiddenError",
    "NotFoundError",
    "ProblemDetail",
    "UnauthorizedError",
    "register_exception_handlers",
]
