"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.hrms.api.dependencies.db import SessionFactory
from src.hrms.repositories import CompanyRepository


def get_company_repository(session_factory: SessionFactory) -> CompanyRepository:
    """Get company repository bound to the shared session factory."""
    return CompanyRepository(session_factory)


CompanyRepo = Annotated[CompanyRepository, Depends(get_company_repository)]
