"""Authentication service for registration and login."""

from typing import Annotated

import structlog
from fastapi import Depends

from taskhub.config import AppSettings
from taskhub.core.auth.backend import create_access_token, hash_password, verify_password
from taskhub.core.auth.schemas import AccessToken
from taskhub.core.database import DBSession
from taskhub.core.errors import ConflictError, UnauthorizedError
from taskhub.core.permissions.roles import Role
from taskhub.modules.users.models import User
from taskhub.modules.users.repos import UserRepository


logger = structlog.get_logger()


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: DBSession, settings: AppSettings) -> None:
        self.db = db
        self.settings = settings
        self.user_repo = UserRepository(db)

    async def register(self, email: str, password: str, full_name: str) -> User:
        """Register a new user with the base ``USER`` role.

        Raises:
            ConflictError: If the email is already registered
        """
        existing = await self.user_repo.get_by_email(email)
        if existing:
            raise ConflictError(
                "Email already registered",
                error_code="email_exists",
            )

        user = User(
            email=email.lower(),
            password_hash=hash_password(password),
            full_name=full_name,
            role=Role.USER,
            is_active=True,
        )
        user = await self.user_repo.create(user)
        logger.info("user_registered", user_id=str(user.id))
        return user

    async def login(self, email: str, password: str) -> tuple[User, AccessToken]:
        """Authenticate a user with email and password.

        Raises:
            UnauthorizedError: If credentials are invalid or the account is suspended
        """
        user = await self.user_repo.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise UnauthorizedError(
                "Invalid email or password",
                error_code="invalid_credentials",
            )

        if not user.is_active:
            raise UnauthorizedError(
                "Account is suspended",
                error_code="account_inactive",
            )

        token = AccessToken(
            access_token=create_access_token(
                user.id, email=user.email, settings=self.settings
            ),
            expires_in=self.settings.access_token_expire_minutes * 60,
        )
        return user, token


AuthSvc = Annotated[AuthService, Depends(AuthService)]
