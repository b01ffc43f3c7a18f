"""Repository for Employee entity."""

from uuid import UUID

from src.hrms.models import Employee
from src.hrms.repositories.base import BaseRepository
from src.hrms.repositories.query import FindOptions, OrderBy, Predicate
from src.hrms.schemas.employee import EmployeeCreate, EmployeeUpdate


class EmployeeRepository(BaseRepository[Employee, EmployeeCreate, EmployeeUpdate]):
    """Repository for Employee entity."""

    model = Employee
    required_fields = ("company_id", "first_name", "last_name")

    async def list_by_company(self, company_id: UUID, status: str | None = None) -> list[Employee]:
        """List a company's employees ordered by last name."""
        where = [Predicate("company_id", company_id)]
        if status is not None:
            where.append(Predicate("status", status))
        return await self.find_all(FindOptions(where=where, order_by=OrderBy("last_name")))
