"""Employee schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.hrms.models.enums import EmployeeStatus


class EmployeeCreate(BaseModel):
    """Schema for creating an employee."""

    model_config = ConfigDict(use_enum_values=True)

    company_id: UUID
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    salary: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    department: str | None = Field(default=None, max_length=100)
    position: str | None = Field(default=None, max_length=100)


class EmployeeUpdate(BaseModel):
    """Schema for partially updating an employee."""

    model_config = ConfigDict(use_enum_values=True)

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    salary: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    status: EmployeeStatus | None = None
    department: str | None = Field(default=None, max_length=100)
    position: str | None = Field(default=None, max_length=100)

    @field_validator("first_name", "last_name", "salary", "status")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class EmployeeRead(BaseModel):
    id: UUID
    company_id: UUID
    first_name: str
    last_name: str
    salary: Decimal
    status: str
    department: str | None
    position: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
