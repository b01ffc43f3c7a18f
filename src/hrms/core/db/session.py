"""Database session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.hrms.core.db.engine import get_engine

_session_factory: async_sessionmaker[AsyncSession] | None = None


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build a session factory for an engine.

    Instances stay readable after commit so repositories can hand them back
    once their per-call session is closed.
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the process-wide session factory singleton."""
    global _session_factory
    if _session_factory is None:
        _session_factory = build_session_factory(get_engine())
    return _session_factory


def reset_session_factory() -> None:
    """Drop the cached factory (after dispose_engine, or between tests)."""
    global _session_factory
    _session_factory = None


@asynccontextmanager
async def get_session(
    engine: AsyncEngine | None = None,
) -> AsyncGenerator[AsyncSession]:
    """Create a standalone database session.

    Args:
        engine: Optional engine override for testing.

    Yields:
        AsyncSession bound to the engine.
    """
    factory = build_session_factory(engine) if engine is not None else get_session_factory()
    async with factory() as session:
        yield session
