"""Company schemas for repository payloads and API responses."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


def _strip_or_none(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


class CompanyCreate(BaseModel):
    """Schema for creating a company."""

    name: str = Field(min_length=1, max_length=200)
    commercial_registration_number: str | None = Field(default=None, max_length=100)
    commercial_file_number: str | None = Field(default=None, max_length=100)
    industry_type: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=200)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Company name cannot be empty or whitespace only")
        return v

    @field_validator(
        "commercial_registration_number", "commercial_file_number", "industry_type", "location"
    )
    @classmethod
    def validate_optional_text(cls, v: str | None) -> str | None:
        return _strip_or_none(v)


class CompanyUpdate(BaseModel):
    """Schema for partially updating a company. Only set fields are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    commercial_registration_number: str | None = Field(default=None, max_length=100)
    commercial_file_number: str | None = Field(default=None, max_length=100)
    industry_type: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=200)
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            raise ValueError("Company name cannot be null")
        v = v.strip()
        if not v:
            raise ValueError("Company name cannot be empty or whitespace only")
        return v

    @field_validator("is_active")
    @classmethod
    def validate_is_active(cls, v: bool | None) -> bool | None:
        # Only runs for explicitly sent values; omitting the field leaves it unchanged
        if v is None:
            raise ValueError("is_active cannot be null")
        return v


class CompanyRead(BaseModel):
    """Schema for reading a company."""

    id: UUID
    name: str
    commercial_registration_number: str | None
    commercial_file_number: str | None
    industry_type: str | None
    location: str | None
    is_active: bool
    total_employees: int
    total_licenses: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CompanyRelationCounts(BaseModel):
    """Live counts of rows related to a company."""

    employee_count: int = 0
    license_count: int = 0
    user_count: int = 0


class CompanyDetail(CompanyRead):
    """Company with live relation counts."""

    stats: CompanyRelationCounts


class CompanyStats(CompanyRelationCounts):
    """Aggregate statistics for one company.

    Counts come from independent queries and are not a consistent snapshot.
    """

    total_salary: Decimal = Decimal("0")
    average_salary: Decimal = Decimal("0")


class CompanySearchOptions(BaseModel):
    """Filters for ``CompanyRepository.search_companies``. Unset filters are ignored."""

    search_term: str | None = None
    industry_type: str | None = None
    location: str | None = None
    is_active: bool | None = None
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)


class ExpiringLicenseSummary(BaseModel):
    """A company and how many of its active licenses expire within the threshold."""

    company: CompanyRead
    expiring_licenses: int


class CompanyEmployeeCount(BaseModel):
    """A company and its number of employees."""

    company: CompanyRead
    employee_count: int
