"""Shared fixtures: in-memory SQLite engines, sessions and test settings."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from confhub.config import Settings
from confhub.models.base import Base

ADMIN_TOKEN = "admin-token-0123456789abcdef"
READ_TOKEN = "read-token-0123456789abcdef"

ADMIN_HEADERS = {"Authorization": f"Bearer {ADMIN_TOKEN}"}
READ_HEADERS = {"Authorization": f"Bearer {READ_TOKEN}"}

MEMORY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def make_test_settings(**overrides: object) -> Settings:
    """Create Settings backed by a fresh in-memory database."""
    values: dict[str, object] = {
        "admin_token": ADMIN_TOKEN,
        "read_token": READ_TOKEN,
        "database_url": MEMORY_DATABASE_URL,
        "auto_create_schema": True,
    }
    values.update(overrides)
    return Settings(**values)  # pyright: ignore[reportArgumentType]


async def create_test_engine() -> AsyncEngine:
    """Create an in-memory SQLite engine with all tables."""
    engine = create_async_engine(MEMORY_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


@pytest_asyncio.fixture
async def session() -> AsyncGenerator[AsyncSession]:
    """Yield a session on a fresh in-memory database."""
    engine = await create_test_engine()
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    try:
        async with session_factory() as session:
            yield session
    finally:
        await engine.dispose()
