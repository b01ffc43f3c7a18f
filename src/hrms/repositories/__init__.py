"""Repository layer - data access abstraction.

Re-exports repositories and query primitives for convenient imports.
"""

from src.hrms.repositories.base import BaseRepository, validate_required
from src.hrms.repositories.company import CompanyRepository
from src.hrms.repositories.employee import EmployeeRepository
from src.hrms.repositories.license import LicenseRepository
from src.hrms.repositories.query import (
    Combinator,
    Filter,
    FindOptions,
    Group,
    Operator,
    OrderBy,
    Predicate,
    SortDirection,
    where_equals,
)

__all__ = [
    # Base
    "BaseRepository",
    "validate_required",
    # Query primitives
    "Combinator",
    "Filter",
    "FindOptions",
    "Group",
    "Operator",
    "OrderBy",
    "Predicate",
    "SortDirection",
    "where_equals",
    # Entities
    "CompanyRepository",
    "EmployeeRepository",
    "LicenseRepository",
]
