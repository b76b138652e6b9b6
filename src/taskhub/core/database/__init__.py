"""Declarative base, tenant-owned mixins and the per-app database handle."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.core.database.base import Base, OrganizationMixin, TimestampMixin, UUIDMixin
from taskhub.core.database.session import Database, get_db


# Type alias for database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]


__all__ = [
    "Base",
    "DBSession",
    "Database",
    "OrganizationMixin",
    "TimestampMixin",
    "UUIDMixin",
    "get_db",
]
