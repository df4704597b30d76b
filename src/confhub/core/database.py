"""Async engine, session factory and the per-request session dependency."""

from collections.abc import AsyncGenerator

from litestar.datastructures import State
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from confhub.models.base import Base


def create_engine(database_url: str, /, *, echo: bool = False) -> AsyncEngine:
    """Create the async engine for ``database_url``."""
    return create_async_engine(database_url, echo=echo)


def create_session_factory(engine: AsyncEngine, /) -> async_sessionmaker[AsyncSession]:
    """Create a session factory that keeps attributes loaded after commit."""
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_schema(engine: AsyncEngine, /) -> None:
    """Create any missing tables for the registered models."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def provide_session(state: State) -> AsyncGenerator[AsyncSession]:
    """Yield a session for one request.

    Commits when the handler succeeds and rolls back when it raises.
    """
    session_factory: async_sessionmaker[AsyncSession] = state.session_factory  # pyright: ignore[reportAny]
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
