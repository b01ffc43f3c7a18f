from src.hrms.schemas.company import (
    CompanyCreate,
    CompanyDetail,
    CompanyEmployeeCount,
    CompanyRead,
    CompanyRelationCounts,
    CompanySearchOptions,
    CompanyStats,
    CompanyUpdate,
    ExpiringLicenseSummary,
)
from src.hrms.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from src.hrms.schemas.license import LicenseCreate, LicenseUpdate
from src.hrms.schemas.pagination import PaginatedResponse

__all__ = [
    # Company
    "CompanyCreate",
    "CompanyDetail",
    "CompanyEmployeeCount",
    "CompanyRead",
    "CompanyRelationCounts",
    "CompanySearchOptions",
    "CompanyStats",
    "CompanyUpdate",
    "ExpiringLicenseSummary",
    # Employee
    "EmployeeCreate",
    "EmployeeRead",
    "EmployeeUpdate",
    # License
    "LicenseCreate",
    "LicenseUpdate",
    # Pagination
    "PaginatedResponse",
]
