"""Test helper functions for common data creation patterns."""

from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.hrms.models import Company, CompanyUser, Employee, License, User
from tests.factories import (
    CompanyFactory,
    CompanyUserFactory,
    EmployeeFactory,
    LicenseFactory,
    UserFactory,
)


async def create_company(session: AsyncSession, **company_kwargs) -> Company:
    """Create and commit a company.

    Args:
        session: Database session
        **company_kwargs: Args passed to CompanyFactory

    Returns:
        Created company
    """
    company = CompanyFactory.build(**company_kwargs)
    session.add(company)
    await session.commit()
    return company


async def add_employees(
    session: AsyncSession,
    company: Company,
    count: int | None = None,
    salaries: list[int | str | Decimal] | None = None,
) -> list[Employee]:
    """Add employees to a company, one per salary (or ``count`` with the default salary).

    Returns:
        The created employees
    """
    if salaries is None:
        salaries = [Decimal("1000.00")] * (count or 0)
    employees = [
        EmployeeFactory.build(company_id=company.id, salary=Decimal(str(salary)))
        for salary in salaries
    ]
    session.add_all(employees)
    await session.commit()
    return employees


async def add_license(
    session: AsyncSession,
    company: Company,
    expiry_date: date | None,
    **license_kwargs,
) -> License:
    """Add a license to a company.

    Returns:
        Created license
    """
    company_license = LicenseFactory.build(
        company_id=company.id, expiry_date=expiry_date, **license_kwargs
    )
    session.add(company_license)
    await session.commit()
    return company_license


async def add_member(session: AsyncSession, company: Company) -> tuple[User, CompanyUser]:
    """Create a user and their membership in a company.

    Returns:
        Tuple of (user, membership)
    """
    user = UserFactory.build()
    session.add(user)
    await session.flush()

    membership = CompanyUserFactory.build(company_id=company.id, user_id=user.id)
    session.add(membership)
    await session.commit()
    return user, membership
