"""GET /api/v1/dashboard/* with a real TieredDashboardService over fakes."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from crm_search.api.v1.dependencies import get_dashboard_service
from crm_search.application.services.background_tasks import BackgroundTaskRunner
from crm_search.application.use_cases.dashboard import TieredDashboardService
from crm_search.domain.enums import CacheTier
from crm_search.main import app

PAYLOADS = {
    CacheTier.REALTIME: {"activeDeals": 1, "todayStats": {"leads": 2, "activities": 0}},
    CacheTier.HOURLY: {"sales": {"deals": {"total": 3, "won": 1, "revenue": 500.0}}},
    CacheTier.DAILY: {"profitLoss": {"revenue": 500.0, "dealsWon": 1, "pipelineValue": 0}},
}


@pytest.fixture
def runner() -> BackgroundTaskRunner:
    return BackgroundTaskRunner()


@pytest.fixture
def dashboard_svc(fake_cache, runner) -> TieredDashboardService:
    source = AsyncMock()

    async def fetch_tier(tier, principal_id, time_range):
        return PAYLOADS[tier]

    source.fetch_tier.side_effect = fetch_tier
    source.ping.return_value = True
    svc = TieredDashboardService(
        source, fake_cache, runner, {"realtime": 30, "hourly": 3600, "daily": 86400}
    )
    app.dependency_overrides[get_dashboard_service] = lambda: svc
    return svc


async def test_summary_requires_auth(client: AsyncClient, dashboard_svc) -> None:
    response = await client.get("/api/v1/dashboard/summary")
    assert response.status_code == 401


async def test_cold_then_warm(client: AsyncClient, dashboard_svc, runner, auth_headers) -> None:
    cold = await client.get("/api/v1/dashboard/summary", headers=auth_headers)
    await runner.drain()
    warm = await client.get("/api/v1/dashboard/summary", headers=auth_headers)

    assert cold.status_code == warm.status_code == 200
    cold_body, warm_body = cold.json(), warm.json()
    assert cold_body["source"] == "database"
    assert warm_body["source"] == "cache"
    assert warm_body["data"] == cold_body["data"]
    assert cold_body["success"] is True
    assert isinstance(cold_body["responseTime"], int)
    assert cold_body["timestamp"]
    assert cold_body["data"]["activeDeals"] == 1


async def test_time_range_and_include(client: AsyncClient, dashboard_svc, fake_cache, runner, auth_headers) -> None:
    response = await client.get(
        "/api/v1/dashboard/summary",
        params={"timeRange": "quarter", "include": "hourly"},
        headers=auth_headers,
    )
    await runner.drain()
    assert response.status_code == 200
    assert set(response.json()["data"]) == {"sales"}
    assert [key for key, _, _ in fake_cache.sets] == ["dashboard:v1:hourly:user-1:quarter"]


async def test_unknown_include_is_400(client: AsyncClient, dashboard_svc, auth_headers) -> None:
    response = await client.get(
        "/api/v1/dashboard/summary", params={"include": "weekly"}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("time_range", [None, "month", "2w"])
async def test_time_range_defaults_and_falls_back_to_month(
    client: AsyncClient, dashboard_svc, fake_cache, runner, auth_headers, time_range
) -> None:
    params = {"include": "daily"}
    if time_range is not None:
        params["timeRange"] = time_range
    response = await client.get("/api/v1/dashboard/summary", params=params, headers=auth_headers)
    await runner.drain()
    assert response.status_code == 200
    assert [key for key, _, _ in fake_cache.sets] == ["dashboard:v1:daily:user-1:month"]


async def test_dashboard_health(client: AsyncClient, dashboard_svc) -> None:
    response = await client.get("/api/v1/dashboard/health")
    assert response.status_code == 200
    assert response.json() == {"service": True, "cache": True, "database": True}


async def test_unconfigured_database_is_503(client: AsyncClient, auth_headers) -> None:
    response = await client.get("/api/v1/dashboard/summary", headers=auth_headers)
    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"


async def test_subject_with_separator_gets_summary(client: AsyncClient, dashboard_svc, bearer) -> None:
    response = await client.get(
        "/api/v1/dashboard/summary", headers=bearer("google-oauth2:123")
    )
    assert response.status_code == 200
    assert response.json()["data"]["activeDeals"] == 1
