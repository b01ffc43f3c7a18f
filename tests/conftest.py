"""Root test fixtures shared across all test types.

Database fixtures use a throwaway SQLite file per test (aiosqlite), so the
suite needs no external services. Each repository call opens its own
connection, which is why an in-memory database is not used.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test-hrms.db")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from src.hrms.core.config import get_settings
from src.hrms.core.db import build_session_factory, create_tables, enable_sqlite_foreign_keys
from src.hrms.repositories import CompanyRepository, EmployeeRepository, LicenseRepository

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Create a test engine on a fresh SQLite file with all tables."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'hrms.db'}",
        poolclass=NullPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Provide a session for seeding data.

    Repositories read through their own sessions, so seed helpers must commit.
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
def company_repo(session_factory: async_sessionmaker[AsyncSession]) -> CompanyRepository:
    return CompanyRepository(session_factory)


@pytest.fixture
def employee_repo(session_factory: async_sessionmaker[AsyncSession]) -> EmployeeRepository:
    return EmployeeRepository(session_factory)


@pytest.fixture
def license_repo(session_factory: async_sessionmaker[AsyncSession]) -> LicenseRepository:
    return LicenseRepository(session_factory)
