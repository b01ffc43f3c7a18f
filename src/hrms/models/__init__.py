"""Model exports.

Import from here: `from src.hrms.models import Company, Employee`
"""

from src.hrms.models.company import Company
from src.hrms.models.employee import Employee
from src.hrms.models.enums import CompanyRole, EmployeeStatus, LicenseStatus
from src.hrms.models.license import License
from src.hrms.models.user import CompanyUser, User

__all__ = [
    # Enums
    "CompanyRole",
    "EmployeeStatus",
    "LicenseStatus",
    # Models
    "Company",
    "CompanyUser",
    "Employee",
    "License",
    "User",
]
