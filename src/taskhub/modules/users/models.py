"""User database models."""

from sqlalchemy import Boolean, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskhub.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from taskhub.core.database.base import Base, TimestampMixin, UUIDMixin
from taskhub.core.permissions.roles import Role


class User(Base, UUIDMixin, TimestampMixin):
    """An account that can authenticate and act on tasks.

    Accounts are deactivated rather than deleted.

    Attributes:
        email: Unique email address
        password_hash: Bcrypt-hashed password
        full_name: User's full name
        role: Global role, independent of any organization role
        is_active: Whether the user can authenticate
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    full_name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="role"),
        default=Role.USER,
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
