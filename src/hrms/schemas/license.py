"""License schemas."""

from datetime import date
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.hrms.models.enums import LicenseStatus


class LicenseCreate(BaseModel):
    """Schema for creating a company license."""

    model_config = ConfigDict(use_enum_values=True)

    company_id: UUID
    name: str = Field(min_length=1, max_length=200)
    number: str = Field(min_length=1, max_length=100)
    license_type: str | None = Field(default=None, max_length=100)
    expiry_date: date | None = None
    is_active: bool = True
    status: LicenseStatus = LicenseStatus.ACTIVE


class LicenseUpdate(BaseModel):
    """Schema for partially updating a license."""

    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(default=None, min_length=1, max_length=200)
    number: str | None = Field(default=None, min_length=1, max_length=100)
    license_type: str | None = Field(default=None, max_length=100)
    expiry_date: date | None = None
    is_active: bool | None = None
    status: LicenseStatus | None = None

    @field_validator("name", "number", "is_active", "status")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        return v
