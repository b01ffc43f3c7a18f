"""Repository for Company entity - joins, grouping and derived statistics."""

import asyncio
from collections.abc import Awaitable
from datetime import timedelta
from decimal import Decimal
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import func
from sqlmodel import SQLModel, col, select

from src.hrms.core.exceptions import StorageError, ValidationError
from src.hrms.core.logging import get_logger
from src.hrms.models import Company, CompanyUser, Employee, License
from src.hrms.models.base import utc_today
from src.hrms.repositories.base import BaseRepository
from src.hrms.repositories.query import (
    Filter,
    FindOptions,
    Group,
    Operator,
    OrderBy,
    Predicate,
)
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
from src.hrms.schemas.pagination import PaginatedResponse

logger = get_logger(__name__)

T = TypeVar("T")

# Free-text search matches any of these columns
SEARCH_FIELDS = (
    "name",
    "commercial_registration_number",
    "commercial_file_number",
    "location",
)

CENTS = Decimal("0.01")


class CompanyRepository(BaseRepository[Company, CompanyCreate, CompanyUpdate]):
    """Repository for Company entity.

    The statistics helpers (``get_employee_count``, ``get_license_count``,
    ``get_user_count``, ``get_total_salary``) are best-effort: any failure is
    logged and reported as zero so one broken statistic does not sink the
    others gathered alongside it.
    """

    model = Company
    required_fields = ("name",)

    async def find_by_id_with_relations(self, id: UUID) -> CompanyDetail | None:
        """Get a company with live employee, license and user counts.

        The three counts run concurrently; they are not a consistent snapshot.
        Returns None (without counting) if the company does not exist.
        """
        company = await self.find_by_id(id)
        if company is None:
            return None

        employee_count, license_count, user_count = await asyncio.gather(
            self.get_employee_count(id),
            self.get_license_count(id),
            self.get_user_count(id),
        )
        return CompanyDetail(
            **CompanyRead.model_validate(company).model_dump(),
            stats=CompanyRelationCounts(
                employee_count=employee_count,
                license_count=license_count,
                user_count=user_count,
            ),
        )

    async def find_by_industry_type(self, industry_type: str) -> list[Company]:
        """List companies in an industry, ordered by name."""
        return await self.find_all(
            FindOptions(where=[Predicate("industry_type", industry_type)], order_by=OrderBy("name"))
        )

    async def find_by_location(self, location: str) -> list[Company]:
        """List companies at a location, ordered by name."""
        return await self.find_all(
            FindOptions(where=[Predicate("location", location)], order_by=OrderBy("name"))
        )

    def _search_filters(self, options: CompanySearchOptions) -> list[Filter]:
        filters: list[Filter] = []
        if options.search_term:
            term = options.search_term
            filters.append(
                Group([Predicate(name, term, Operator.CONTAINS) for name in SEARCH_FIELDS])
            )
        if options.industry_type:
            filters.append(Predicate("industry_type", options.industry_type))
        if options.location:
            filters.append(Predicate("location", options.location))
        if options.is_active is not None:
            filters.append(Predicate("is_active", options.is_active))
        return filters

    def _search_find_options(self, options: CompanySearchOptions) -> FindOptions:
        return FindOptions(
            where=self._search_filters(options),
            order_by=OrderBy("name"),
            limit=options.limit,
            offset=options.offset,
        )

    async def search_companies(self, options: CompanySearchOptions) -> list[Company]:
        """Search companies by free text and exact filters.

        The search term matches name, registration number, file number or
        location; every other set filter is ANDed with it. Results are ordered by name.
        """
        return await self.find_all(self._search_find_options(options))

    async def search_companies_paginated(
        self, options: CompanySearchOptions
    ) -> PaginatedResponse[Company]:
        """Same as ``search_companies`` but also returns the total match count."""
        return await self.paginate(self._search_find_options(options))

    async def get_company_stats(self, company_id: UUID) -> CompanyStats:
        """Aggregate counts and salary figures for a company.

        ``average_salary`` is 0 when the company has no employees.
        """
        employee_count, license_count, user_count, total_salary = await asyncio.gather(
            self.get_employee_count(company_id),
            self.get_license_count(company_id),
            self.get_user_count(company_id),
            self.get_total_salary(company_id),
        )
        average_salary = (
            (total_salary / employee_count).quantize(CENTS) if employee_count > 0 else Decimal("0")
        )
        return CompanyStats(
            employee_count=employee_count,
            license_count=license_count,
            user_count=user_count,
            total_salary=total_salary,
            average_salary=average_salary,
        )

    async def _best_effort(
        self, stat: str, company_id: UUID, fetch: Awaitable[T], default: T
    ) -> T:
        try:
            return await fetch
        except Exception as e:
            # CancelledError is a BaseException and still propagates
            logger.warning(
                "Company statistic unavailable, using default",
                stat=stat,
                company_id=str(company_id),
                error=e.message if isinstance(e, StorageError) else str(e),
                error_type=type(e).__name__,
            )
            return default

    async def _count_related(self, model: type[SQLModel], company_id: UUID) -> int:
        query = (
            select(func.count())
            .select_from(model)
            .where(model.company_id == company_id)  # type: ignore[attr-defined]
        )
        return int(await self.fetch_scalar(query, f"count_{model.__tablename__}") or 0)

    async def get_employee_count(self, company_id: UUID) -> int:
        """Number of employees in the company (0 on failure)."""
        return await self._best_effort(
            "employee_count",
            company_id,
            self._count_related(Employee, company_id),
            0,
        )

    async def get_license_count(self, company_id: UUID) -> int:
        """Number of licenses held by the company (0 on failure)."""
        return await self._best_effort(
            "license_count",
            company_id,
            self._count_related(License, company_id),
            0,
        )

    async def get_user_count(self, company_id: UUID) -> int:
        """Number of users with membership in the company (0 on failure)."""
        return await self._best_effort(
            "user_count",
            company_id,
            self._count_related(CompanyUser, company_id),
            0,
        )

    async def _sum_salary(self, company_id: UUID) -> Decimal:
        query = select(func.sum(Employee.salary)).where(Employee.company_id == company_id)
        total = await self.fetch_scalar(query, "sum_salaries")
        return Decimal(str(total)) if total is not None else Decimal("0")

    async def get_total_salary(self, company_id: UUID) -> Decimal:
        """Sum of employee salaries in the company (0 on failure)."""
        return await self._best_effort(
            "total_salary", company_id, self._sum_salary(company_id), Decimal("0")
        )

    async def get_companies_with_expiring_licenses(
        self, days_threshold: int = 30
    ) -> list[ExpiringLicenseSummary]:
        """Companies with active licenses expiring on or before today + ``days_threshold``.

        Already-expired active licenses count as expiring. Companies without any
        such license are left out, not reported with a zero count.
        """
        threshold = utc_today() + timedelta(days=days_threshold)
        expiring = func.count(License.id)
        query = (
            select(Company, expiring.label("expiring_licenses"))
            .join(License, col(License.company_id) == col(Company.id))
            .where(
                col(License.is_active).is_(True),
                col(License.expiry_date).is_not(None),
                col(License.expiry_date) <= threshold,
            )
            .group_by(col(Company.id))
            .having(expiring > 0)
            .order_by(col(Company.name).asc())
        )
        rows = await self.fetch_rows(query, "find_expiring_licenses")
        return [
            ExpiringLicenseSummary(
                company=CompanyRead.model_validate(company),
                expiring_licenses=int(count),
            )
            for company, count in rows
        ]

    async def get_companies_by_employee_range(
        self, min_employees: int, max_employees: int
    ) -> list[CompanyEmployeeCount]:
        """Companies whose employee count is within ``[min, max]``, largest first.

        The range is applied after grouping, so companies with no employees
        take part with a count of 0.
        """
        if min_employees > max_employees:
            raise ValidationError(
                "min_employees cannot be greater than max_employees",
                fields=["min_employees", "max_employees"],
            )

        employee_count = func.count(Employee.id)
        query = (
            select(Company, employee_count.label("employee_count"))
            .outerjoin(Employee, col(Employee.company_id) == col(Company.id))
            .group_by(col(Company.id))
            .having(employee_count.between(min_employees, max_employees))
            .order_by(employee_count.desc(), col(Company.name).asc())
        )
        rows = await self.fetch_rows(query, "group_by_employee_count")
        return [
            CompanyEmployeeCount(
                company=CompanyRead.model_validate(company),
                employee_count=int(count),
            )
            for company, count in rows
        ]

    async def update_company_stats(self, company_id: UUID) -> Company | None:
        """Recompute and persist the denormalized employee and license counters.

        Nothing triggers this automatically: call it after adding or removing
        employees or licenses. Counting failures propagate instead of writing zeros.

        Returns:
            The updated company, or None if it does not exist.
        """
        employee_count, license_count = await asyncio.gather(
            self._count_related(Employee, company_id),
            self._count_related(License, company_id),
        )
        values: dict[str, Any] = {
            "total_employees": employee_count,
            "total_licenses": license_count,
        }
        company = await self.update(company_id, values)
        if company is not None:
            logger.info(
                "Company counters synced",
                company_id=str(company_id),
                total_employees=employee_count,
                total_licenses=license_count,
            )
        return company
