"""Repository for License entity."""

from uuid import UUID

from src.hrms.models import License
from src.hrms.repositories.base import BaseRepository
from src.hrms.repositories.query import FindOptions, OrderBy, Predicate
from src.hrms.schemas.license import LicenseCreate, LicenseUpdate


class LicenseRepository(BaseRepository[License, LicenseCreate, LicenseUpdate]):
    """Repository for License entity."""

    model = License
    required_fields = ("company_id", "name", "number")

    async def list_active_by_company(self, company_id: UUID) -> list[License]:
        """List a company's active licenses, soonest expiry first."""
        return await self.find_all(
            FindOptions(
                where=[Predicate("company_id", company_id), Predicate("is_active", True)],
                order_by=OrderBy("expiry_date"),
            )
        )
