"""User models - accounts and their company memberships."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.hrms.models.base import utc_now
from src.hrms.models.enums import CompanyRole


class User(SQLModel, table=True):
    """Application user account."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    role: str = Field(default=CompanyRole.WORKER.value, max_length=50)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class CompanyUser(SQLModel, table=True):
    """Junction table for user-company membership (access, not hierarchy)."""

    __tablename__ = "company_users"

    company_id: UUID = Field(foreign_key="companies.id", ondelete="CASCADE", primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE", primary_key=True)
    role: str = Field(default=CompanyRole.WORKER.value, max_length=50)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
