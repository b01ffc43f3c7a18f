"""HTTP tests for the company endpoints, error mapping and health check."""

from collections.abc import AsyncGenerator
from datetime import timedelta
from pathlib import Path
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from src.hrms.api.dependencies import get_db_session_factory
from src.hrms.core.db import build_session_factory
from src.hrms.core.db import session as session_module
from src.hrms.main import create_app
from src.hrms.models.base import utc_today
from tests.helpers import add_employees, add_license, create_company

pytestmark = pytest.mark.integration


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession], monkeypatch: pytest.MonkeyPatch
) -> AsyncGenerator[AsyncClient]:
    """HTTP client for an app wired to the per-test database."""
    monkeypatch.setattr(session_module, "_session_factory", session_factory)
    app = create_app()
    app.dependency_overrides[get_db_session_factory] = lambda: session_factory
    async with _client(app) as c:
        yield c


@pytest.fixture
async def broken_client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """HTTP client whose database cannot be opened."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'hrms.db'}", poolclass=NullPool
    )
    factory = build_session_factory(engine)
    monkeypatch.setattr(session_module, "_session_factory", factory)
    app = create_app()
    app.dependency_overrides[get_db_session_factory] = lambda: factory
    async with _client(app) as c:
        yield c
    await engine.dispose()


class TestCompanyCrud:
    async def test_create_then_get(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/companies", json={"name": "  Blue Nile Co. ", "location": "Khartoum"}
        )

        assert response.status_code == 201
        created = response.json()
        assert created["name"] == "Blue Nile Co."
        assert created["total_employees"] == 0

        response = await client.get(f"/api/v1/companies/{created['id']}")

        assert response.status_code == 200
        detail = response.json()
        assert detail["location"] == "Khartoum"
        assert detail["stats"] == {"employee_count": 0, "license_count": 0, "user_count": 0}

    async def test_create_rejects_blank_name(self, client: AsyncClient):
        response = await client.post("/api/v1/companies", json={"name": "   "})

        assert response.status_code == 422

    async def test_patch(self, client: AsyncClient, db_session: AsyncSession):
        company = await create_company(db_session, location="Cairo")

        response = await client.patch(
            f"/api/v1/companies/{company.id}", json={"location": "Giza"}
        )

        assert response.status_code == 200
        assert response.json()["location"] == "Giza"
        assert response.json()["name"] == company.name

    async def test_patch_null_for_required_column_is_422(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        company = await create_company(db_session)

        response = await client.patch(
            f"/api/v1/companies/{company.id}", json={"is_active": None}
        )

        assert response.status_code == 422

    async def test_patch_missing(self, client: AsyncClient):
        response = await client.patch(f"/api/v1/companies/{uuid4()}", json={"location": "Giza"})

        assert response.status_code == 404
        assert "request_id" in response.json()

    async def test_delete(self, client: AsyncClient, db_session: AsyncSession):
        company = await create_company(db_session)

        first = await client.delete(f"/api/v1/companies/{company.id}")
        second = await client.delete(f"/api/v1/companies/{company.id}")

        assert first.status_code == 204
        assert second.status_code == 404


class TestCompanyQueries:
    async def test_search_paginates_by_name(self, client: AsyncClient, db_session: AsyncSession):
        await create_company(db_session, name="Blue Nile Co.", location="Khartoum")
        await create_company(db_session, name="Delta Works", location="Nile District")
        await create_company(db_session, name="Acme", location="Cairo")

        response = await client.get("/api/v1/companies", params={"search": "nile", "limit": 1})

        assert response.status_code == 200
        page = response.json()
        assert [c["name"] for c in page["items"]] == ["Blue Nile Co."]
        assert page["total"] == 2
        assert page["has_more"] is True

    async def test_stats(self, client: AsyncClient, db_session: AsyncSession):
        company = await create_company(db_session)
        await add_employees(db_session, company, salaries=[1000, 2000, 3000])

        response = await client.get(f"/api/v1/companies/{company.id}/stats")

        assert response.status_code == 200
        stats = response.json()
        assert stats["employee_count"] == 3
        assert float(stats["total_salary"]) == 6000
        assert float(stats["average_salary"]) == 2000

    async def test_stats_missing_company(self, client: AsyncClient):
        response = await client.get(f"/api/v1/companies/{uuid4()}/stats")

        assert response.status_code == 404

    async def test_expiring_licenses(self, client: AsyncClient, db_session: AsyncSession):
        company = await create_company(db_session, name="Soon")
        await add_license(db_session, company, expiry_date=utc_today() + timedelta(days=10))

        narrow = await client.get("/api/v1/companies/expiring-licenses", params={"days": 5})
        default = await client.get("/api/v1/companies/expiring-licenses")

        assert narrow.json() == []
        assert [s["company"]["name"] for s in default.json()] == ["Soon"]
        assert default.json()[0]["expiring_licenses"] == 1

    async def test_employee_range(self, client: AsyncClient, db_session: AsyncSession):
        company = await create_company(db_session, name="Five")
        await add_employees(db_session, company, count=5)

        response = await client.get(
            "/api/v1/companies/by-employee-range",
            params={"min_employees": 5, "max_employees": 10},
        )

        assert response.status_code == 200
        assert [(r["company"]["name"], r["employee_count"]) for r in response.json()] == [
            ("Five", 5)
        ]

    async def test_inverted_employee_range_is_validation_error(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/companies/by-employee-range",
            params={"min_employees": 10, "max_employees": 5},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["fields"] == ["min_employees", "max_employees"]
        assert body["request_id"]

    async def test_sync_stats(self, client: AsyncClient, db_session: AsyncSession):
        company = await create_company(db_session)
        await add_employees(db_session, company, count=3)

        response = await client.post(f"/api/v1/companies/{company.id}/sync-stats")

        assert response.status_code == 200
        assert response.json()["total_employees"] == 3


class TestStorageUnavailable:
    async def test_storage_error_maps_to_503(self, broken_client: AsyncClient):
        response = await broken_client.get("/api/v1/companies")

        assert response.status_code == 503
        body = response.json()
        assert body["request_id"]
        assert "companies" in body["detail"]

    async def test_health_reports_unhealthy(self, broken_client: AsyncClient):
        response = await broken_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "healthy"


async def test_request_id_propagated(client: AsyncClient):
    request_id = uuid4().hex

    response = await client.get(
        f"/api/v1/companies/{uuid4()}", headers={"X-Request-ID": request_id}
    )

    assert response.status_code == 404
    assert response.json()["request_id"] == request_id
    assert response.headers["X-Request-ID"] == request_id
