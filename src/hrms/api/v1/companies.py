"""Company endpoints - thin HTTP surface over CompanyRepository.

Repository errors are not caught here: ValidationError and StorageError are
mapped to responses by the handlers in core.exceptions.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status

from src.hrms.api.dependencies import CompanyRepo
from src.hrms.core.config import get_settings
from src.hrms.core.logging import bind_company_context
from src.hrms.repositories import Predicate
from src.hrms.schemas.company import (
    CompanyCreate,
    CompanyDetail,
    CompanyEmployeeCount,
    CompanyRead,
    CompanySearchOptions,
    CompanyStats,
    CompanyUpdate,
    ExpiringLicenseSummary,
)
from src.hrms.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/companies", tags=["companies"])


async def company_log_context(company_id: Annotated[UUID, Path()]) -> UUID:
    bind_company_context(company_id)
    return company_id


CompanyId = Annotated[UUID, Depends(company_log_context)]


def _not_found(company_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Company {company_id} not found",
    )


@router.get(
    "",
    response_model=PaginatedResponse[CompanyRead],
    summary="Search companies",
    description="Free-text search over name, registration number and location, "
    "combined with exact filters. Ordered by name.",
)
async def list_companies(
    repo: CompanyRepo,
    search: Annotated[str | None, Query(description="Free-text search term")] = None,
    industry_type: Annotated[str | None, Query()] = None,
    location: Annotated[str | None, Query()] = None,
    is_active: Annotated[bool | None, Query()] = None,
    limit: Annotated[int | None, Query(ge=1, le=200, description="Max items to return")] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> PaginatedResponse[CompanyRead]:
    """Search companies with pagination."""
    settings = get_settings()
    options = CompanySearchOptions(
        search_term=search,
        industry_type=industry_type,
        location=location,
        is_active=is_active,
        limit=min(limit or settings.default_page_size, settings.max_page_size),
        offset=offset,
    )
    page = await repo.search_companies_paginated(options)
    return PaginatedResponse[CompanyRead](
        items=[CompanyRead.model_validate(c) for c in page.items],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
        has_more=page.has_more,
    )


@router.get(
    "/expiring-licenses",
    response_model=list[ExpiringLicenseSummary],
    summary="Companies with expiring licenses",
)
async def list_companies_with_expiring_licenses(
    repo: CompanyRepo,
    days: Annotated[int | None, Query(ge=0, le=3650, description="Days from today")] = None,
) -> list[ExpiringLicenseSummary]:
    """Companies whose active licenses expire within the threshold."""
    if days is None:
        days = get_settings().license_expiry_threshold_days
    return await repo.get_companies_with_expiring_licenses(days)


@router.get(
    "/by-employee-range",
    response_model=list[CompanyEmployeeCount],
    summary="Companies by employee count",
)
async def list_companies_by_employee_range(
    repo: CompanyRepo,
    min_employees: Annotated[int, Query(ge=0)],
    max_employees: Annotated[int, Query(ge=0)],
) -> list[CompanyEmployeeCount]:
    """Companies with an employee count in the inclusive range, largest first."""
    return await repo.get_companies_by_employee_range(min_employees, max_employees)


@router.get(
    "/{company_id}",
    response_model=CompanyDetail,
    summary="Get company",
    responses={404: {"description": "Company not found"}},
)
async def get_company(company_id: CompanyId, repo: CompanyRepo) -> CompanyDetail:
    """Get a company with live relation counts."""
    company = await repo.find_by_id_with_relations(company_id)
    if company is None:
        raise _not_found(company_id)
    return company


@router.get(
    "/{company_id}/stats",
    response_model=CompanyStats,
    summary="Company statistics",
    responses={404: {"description": "Company not found"}},
)
async def get_company_stats(company_id: CompanyId, repo: CompanyRepo) -> CompanyStats:
    """Counts and salary aggregates for a company."""
    if not await repo.exists([Predicate("id", company_id)]):
        raise _not_found(company_id)
    return await repo.get_company_stats(company_id)


@router.post(
    "",
    response_model=CompanyRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create company",
)
async def create_company(request: CompanyCreate, repo: CompanyRepo) -> CompanyRead:
    """Create a new company."""
    company = await repo.create(request)
    return CompanyRead.model_validate(company)


@router.patch(
    "/{company_id}",
    response_model=CompanyRead,
    summary="Update company",
    responses={404: {"description": "Company not found"}},
)
async def update_company(
    company_id: CompanyId, request: CompanyUpdate, repo: CompanyRepo
) -> CompanyRead:
    """Apply a partial update to a company."""
    company = await repo.update(company_id, request)
    if company is None:
        raise _not_found(company_id)
    return CompanyRead.model_validate(company)


@router.delete(
    "/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete company",
    description="Deletes the company together with its employees, licenses and memberships.",
    responses={404: {"description": "Company not found"}},
)
async def delete_company(company_id: CompanyId, repo: CompanyRepo) -> Response:
    """Delete a company."""
    if not await repo.delete(company_id):
        raise _not_found(company_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{company_id}/sync-stats",
    response_model=CompanyRead,
    summary="Resync denormalized counters",
    responses={404: {"description": "Company not found"}},
)
async def sync_company_stats(company_id: CompanyId, repo: CompanyRepo) -> CompanyRead:
    """Recompute total_employees and total_licenses from live data."""
    company = await repo.update_company_stats(company_id)
    if company is None:
        raise _not_found(company_id)
    return CompanyRead.model_validate(company)
