"""FastAPI dependency injection definitions."""

from src.hrms.api.dependencies.db import SessionFactory, get_db_session_factory
from src.hrms.api.dependencies.repositories import CompanyRepo, get_company_repository

__all__ = [
    # Database
    "SessionFactory",
    "get_db_session_factory",
    # Repositories
    "CompanyRepo",
    "get_company_repository",
]
