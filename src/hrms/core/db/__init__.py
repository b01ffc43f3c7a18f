"""Database utilities - engine and session factory."""

from src.hrms.core.db.engine import (
    create_tables,
    dispose_engine,
    enable_sqlite_foreign_keys,
    get_engine,
)
from src.hrms.core.db.session import (
    build_session_factory,
    get_session,
    get_session_factory,
    reset_session_factory,
)

__all__ = [
    # Engine
    "create_tables",
    "dispose_engine",
    "enable_sqlite_foreign_keys",
    "get_engine",
    # Session
    "build_session_factory",
    "get_session",
    "get_session_factory",
    "reset_session_factory",
]
