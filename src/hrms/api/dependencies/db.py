"""Database dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.hrms.core.db import get_session_factory


def get_db_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the shared session factory. Repositories open one session per call."""
    return get_session_factory()


SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_db_session_factory)]
