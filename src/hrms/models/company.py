"""Company model - the tenant boundary for all HR data."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.hrms.models.base import utc_now


class Company(SQLModel, table=True):
    """Company registry.

    ``total_employees`` and ``total_licenses`` are denormalized counters. They are
    only brought back in sync by ``CompanyRepository.update_company_stats``.
    """

    __tablename__ = "companies"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200, index=True)
    commercial_registration_number: str | None = Field(default=None, max_length=100)
    commercial_file_number: str | None = Field(default=None, max_length=100)
    industry_type: str | None = Field(default=None, max_length=100, index=True)
    location: str | None = Field(default=None, max_length=200, index=True)
    is_active: bool = Field(default=True)
    total_employees: int = Field(default=0)
    total_licenses: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
