"""Password hashing and access tokens.

Access tokens are HS256 JWTs whose subject is the user id. They carry no
role: the role is re-read from the user row on every request, so a
demotion takes effect before the token expires.
"""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from taskhub.config import Settings, get_settings
from taskhub.core.auth.schemas import TokenData
from taskhub.core.constants import ACCESS_TOKEN_JTI_LENGTH, BCRYPT_ROUNDS


ACCESS_TOKEN_TYPE = "access"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_id: UUID,
    *,
    email: str | None = None,
    lifetime: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """Issue a signed access token for ``user_id``.

    Args:
        user_id: Subject of the token
        email: Optional email claim, informational only
        lifetime: Overrides ``access_token_expire_minutes``
        settings: Signing settings; the environment settings by default
    """
    settings = settings or get_settings()
    issued_at = datetime.now(UTC)
    lifetime = lifetime or timedelta(minutes=settings.access_token_expire_minutes)

    claims: dict[str, Any] = {
        "sub": str(user_id),
        "type": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + lifetime,
        "jti": secrets.token_urlsafe(ACCESS_TOKEN_JTI_LENGTH),
    }
    if email:
        claims["email"] = email

    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings | None = None) -> TokenData | None:
    """Return the token's claims, or None when it cannot be trusted.

    Bad signatures, expired tokens and malformed subjects all give None;
    callers decide whether that is an error.
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None

    if "sub" not in payload or "exp" not in payload:
        return None

    try:
        return TokenData(
            user_id=payload["sub"],
            email=payload.get("email"),
            exp=datetime.fromtimestamp(payload["exp"], tz=UTC),
            type=payload.get("type", ACCESS_TOKEN_TYPE),
            jti=payload.get("jti"),
        )
    except (ValidationError, TypeError, ValueError):
        return None
