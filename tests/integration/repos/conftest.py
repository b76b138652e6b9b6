"""Database fixtures for repository tests.

These tests need a PostgreSQL database. The URL comes from
``TEST_DATABASE_URL`` or, failing that, the configured database with a
``_test`` suffix. Tests are skipped when the server cannot be reached.
"""

import os
from collections.abc import AsyncGenerator

import asyncpg
import pytest
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from taskhub.config import get_settings
from taskhub.core.database import Base
from taskhub.core.permissions.roles import OrgRole, Role

# Import all models to ensure they're registered with Base.metadata
from taskhub.modules.comments.models import Comment  # noqa: F401
from taskhub.modules.organizations.models import Membership, Organization
from taskhub.modules.tasks.models import Task  # noqa: F401
from taskhub.modules.teams.models import Team, TeamMembership  # noqa: F401
from taskhub.modules.users.models import User


TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL",
    get_settings().async_database_url.rsplit("/", 1)[0] + "/taskhub_test",
)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create the schema on the test database and drop it afterwards."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool, echo=False)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (OSError, DBAPIError, asyncpg.PostgresError) as e:
        await engine.dispose()
        pytest.skip(f"test database unavailable: {type(e).__name__}")

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session inside a transaction that is rolled back after the test."""
    session_factory = async_sessionmaker(
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with engine.connect() as conn:
        await conn.begin()

        async with session_factory(bind=conn) as session:
            yield session

        await conn.rollback()


async def add_user(db: AsyncSession, email: str, role: Role = Role.USER) -> User:
    user = User(email=email, password_hash="hashed", full_name="Test User", role=role)
    db.add(user)
    await db.flush()
    return user


@pytest.fixture
async def user(db: AsyncSession) -> User:
    return await add_user(db, "owner@example.com")


@pytest.fixture
async def other_user(db: AsyncSession) -> User:
    return await add_user(db, "other@example.com")


@pytest.fixture
async def organization(db: AsyncSession) -> Organization:
    organization = Organization(name="Acme", slug="acme")
    db.add(organization)
    await db.flush()
    return organization


@pytest.fixture
async def other_organization(db: AsyncSession) -> Organization:
    organization = Organization(name="Globex", slug="globex")
    db.add(organization)
    await db.flush()
    return organization


@pytest.fixture
async def membership(db: AsyncSession, user: User, organization: Organization) -> Membership:
    membership = Membership(
        user_id=user.id, organization_id=organization.id, role=OrgRole.MANAGER
    )
    db.add(membership)
    await db.flush()
    return membership
