"""License model - permits held by a company."""

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.hrms.models.base import utc_now
from src.hrms.models.enums import LicenseStatus


class License(SQLModel, table=True):
    """Company license. ``expiry_date`` is a calendar date, compared day by day."""

    __tablename__ = "licenses"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: UUID = Field(foreign_key="companies.id", ondelete="CASCADE", index=True)
    name: str = Field(max_length=200)
    number: str = Field(max_length=100)
    license_type: str | None = Field(default=None, max_length=100)
    expiry_date: date | None = Field(default=None, index=True)
    is_active: bool = Field(default=True)
    status: str = Field(default=LicenseStatus.ACTIVE.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
