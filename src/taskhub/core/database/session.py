"""Async database handle.

The engine and session factory live on a ``Database`` instance that the
application factory constructs and stores on ``app.state``. Nothing here
opens a connection at import time.
"""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taskhub.config import Settings


class Database:
    """Owns the async engine and session factory for one application."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a handle from application settings."""
        engine = create_async_engine(
            settings.async_database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            echo=settings.database_echo,
            pool_pre_ping=True,
        )
        return cls(engine)

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session that commits on success and rolls back on error."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> None:
        """Round-trip a trivial query; connection errors propagate."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session.

    Usage:
        @router.get("/items")
        async def list_items(db: DBSession):
            ...
    """
    database: Database = request.app.state.database
    async for session in database.session():
        yield session
