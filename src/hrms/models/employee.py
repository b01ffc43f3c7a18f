"""Employee model - always owned by exactly one company."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from src.hrms.models.base import utc_now
from src.hrms.models.enums import EmployeeStatus


class Employee(SQLModel, table=True):
    """Employee of a company. Removed together with its company (ON DELETE CASCADE)."""

    __tablename__ = "employees"
    __table_args__ = (CheckConstraint("salary >= 0", name="ck_employees_salary_non_negative"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: UUID = Field(foreign_key="companies.id", ondelete="CASCADE", index=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    salary: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    status: str = Field(default=EmployeeStatus.ACTIVE.value, max_length=20)
    department: str | None = Field(default=None, max_length=100)
    position: str | None = Field(default=None, max_length=100)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def status_enum(self) -> EmployeeStatus:
        """Get status as EmployeeStatus enum."""
        return EmployeeStatus(self.status)
