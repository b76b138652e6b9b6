"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from taskhub.main import create_app
from tests.fakes import (
    AuthState,
    InMemoryMembershipStore,
    InMemoryTeamMembershipStore,
    install_overrides,
    make_db_session,
)


@pytest.fixture
def membership_store() -> InMemoryMembershipStore:
    return InMemoryMembershipStore()


@pytest.fixture
def team_membership_store() -> InMemoryTeamMembershipStore:
    return InMemoryTeamMembershipStore()


@pytest.fixture
def auth_state() -> AuthState:
    """Switch the authenticated actor by assigning ``auth_state.actor``."""
    return AuthState()


@pytest.fixture
def db_session() -> AsyncMock:
    return make_db_session()


@pytest.fixture
async def app(
    auth_state: AuthState,
    membership_store: InMemoryMembershipStore,
    team_membership_store: InMemoryTeamMembershipStore,
    db_session: AsyncMock,
) -> AsyncGenerator[FastAPI, None]:
    """Create a test application with in-memory collaborators."""
    application = create_app()
    install_overrides(
        application, auth_state, membership_store, team_membership_store, db_session
    )

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
