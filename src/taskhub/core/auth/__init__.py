"""Authentication module for JWT and password handling."""

from taskhub.core.auth.backend import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from taskhub.core.auth.dependencies import (
    CurrentActor,
    OptionalActor,
    get_current_actor,
    get_optional_actor,
)
from taskhub.core.auth.schemas import AccessToken, Actor, TokenData


__all__ = [
    "AccessToken",
    "Actor",
    "CurrentActor",
    "OptionalActor",
    "TokenData",
    "create_access_token",
    "decode_token",
    "get_current_actor",
    "get_optional_actor",
    "hash_password",
    "verify_password",
]
