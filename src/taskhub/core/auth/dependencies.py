"""Actor resolution for requests.

A token is read from the ``token`` cookie or the bearer header (the cookie
wins). ``get_current_actor`` turns every failure into a 401/403;
``get_optional_actor`` turns the same failures into an anonymous request so
guards and the tenant scope resolver can produce their own denial.
"""

from typing import TYPE_CHECKING, Annotated

import structlog
from fastapi import Cookie, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskhub.config import get_app_settings
from taskhub.core.auth.backend import ACCESS_TOKEN_TYPE, decode_token
from taskhub.core.auth.schemas import Actor, TokenData
from taskhub.core.constants import MSG_ACCESS_TOKEN_REQUIRED
from taskhub.core.database import DBSession
from taskhub.core.errors import ForbiddenError, UnauthorizedError


if TYPE_CHECKING:
    from taskhub.modules.users.models import User


bearer_scheme = HTTPBearer(auto_error=False)

BearerCredentials = Annotated[
    HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
]
TokenCookie = Annotated[str | None, Cookie(alias="token")]


def _raw_token(
    credentials: HTTPAuthorizationCredentials | None, cookie_token: str | None
) -> str | None:
    if cookie_token:
        return cookie_token
    return credentials.credentials if credentials else None


async def _load_user(db: DBSession, token_data: TokenData) -> "User | None":
    from taskhub.modules.users.repos import UserRepository  # noqa: PLC0415

    return await UserRepository(db).get_by_id(token_data.user_id)


def _bind_actor(request: Request, user: "User") -> Actor:
    actor = Actor.model_validate(user)
    request.state.user_id = actor.id
    structlog.contextvars.bind_contextvars(user_id=str(actor.id))
    return actor


async def get_token_data(
    request: Request,
    credentials: BearerCredentials,
    token: TokenCookie = None,
) -> TokenData:
    """Return the claims of the request's access token.

    Raises:
        UnauthorizedError: If the token is missing, invalid, expired or not
            an access token
    """
    raw_token = _raw_token(credentials, token)
    if not raw_token:
        raise UnauthorizedError(MSG_ACCESS_TOKEN_REQUIRED, error_code="missing_token")

    token_data = decode_token(raw_token, get_app_settings(request))
    if token_data is None:
        raise UnauthorizedError("Invalid or expired token", error_code="invalid_token")
    if token_data.type != ACCESS_TOKEN_TYPE:
        raise UnauthorizedError("Invalid token type", error_code="invalid_token_type")
    return token_data


async def get_current_actor(
    request: Request,
    token_data: Annotated[TokenData, Depends(get_token_data)],
    db: DBSession,
) -> Actor:
    """Return the actor behind the token, re-reading role and status.

    Raises:
        UnauthorizedError: If the user no longer exists
        ForbiddenError: If the account is suspended
    """
    user = await _load_user(db, token_data)
    if user is None:
        raise UnauthorizedError("User not found", error_code="user_not_found")
    if not user.is_active:
        raise ForbiddenError("Account is suspended", error_code="user_inactive")
    return _bind_actor(request, user)


async def get_optional_actor(
    request: Request,
    credentials: BearerCredentials,
    db: DBSession,
    token: TokenCookie = None,
) -> Actor | None:
    raw_token = _raw_token(credentials, token)
    token_data = (
        decode_token(raw_token, get_app_settings(request)) if raw_token else None
    )
    if token_data is None or token_data.type != ACCESS_TOKEN_TYPE:
        return None

    user = await _load_user(db, token_data)
    if user is None or not user.is_active:
        return None
    return _bind_actor(request, user)


CurrentActor = Annotated[Actor, Depends(get_current_actor)]
OptionalActor = Annotated[Actor | None, Depends(get_optional_actor)]
