"""Shared enums for models."""

from enum import Enum


class EmployeeStatus(str, Enum):
    """Employment status of an employee."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class LicenseStatus(str, Enum):
    """Lifecycle tag of a company license."""

    ACTIVE = "active"
    EXPIRED = "expired"
    PENDING = "pending"
    SUSPENDED = "suspended"


class CompanyRole(str, Enum):
    """User role within a company."""

    COMPANY_MANAGER = "company_manager"
    ADMINISTRATIVE_EMPLOYEE = "administrative_employee"
    WORKER = "worker"
