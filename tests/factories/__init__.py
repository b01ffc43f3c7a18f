"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import CompanyFactory, EmployeeFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.company import CompanyFactory
from tests.factories.employee import EmployeeFactory, LicenseFactory
from tests.factories.user import CompanyUserFactory, UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Company
    "CompanyFactory",
    # Employee / License
    "EmployeeFactory",
    "LicenseFactory",
    # User
    "CompanyUserFactory",
    "UserFactory",
]
