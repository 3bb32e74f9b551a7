"""TieredDashboardService: all-or-nothing cache hits, refetch, fallbacks, write-back."""

from unittest.mock import AsyncMock

import pytest

from crm_search.application.dtos.dashboard import empty_tier_payload
from crm_search.application.services.background_tasks import BackgroundTaskRunner
from crm_search.application.use_cases.dashboard import (
    TieredDashboardService,
    resolve_tiers,
    resolve_time_range,
)
from crm_search.domain.enums import CacheTier, DashboardSource
from crm_search.domain.exceptions import ValidationException

TTLS = {"realtime": 30, "hourly": 3600, "daily": 86400}

FRESH = {
    CacheTier.REALTIME: {"recentLeads": [{"id": "l1"}], "activeDeals": 2},
    CacheTier.HOURLY: {"sales": {"leads": {"total": 4, "qualified": 1}}},
    CacheTier.DAILY: {"overview": {"leads": {"total": 9}}},
}


@pytest.fixture
def data_source():
    source = AsyncMock()

    async def fetch_tier(tier, principal_id, time_range):
        return FRESH[tier]

    source.fetch_tier.side_effect = fetch_tier
    source.ping.return_value = True
    return source


@pytest.fixture
def runner() -> BackgroundTaskRunner:
    return BackgroundTaskRunner()


@pytest.fixture
def service(data_source, fake_cache, runner) -> TieredDashboardService:
    return TieredDashboardService(data_source, fake_cache, runner, TTLS)


async def test_cold_then_warm_returns_identical_data(service, runner, fake_cache, data_source) -> None:
    cold = await service.get_summary("user-1")
    await runner.drain()
    warm = await service.get_summary("user-1")

    assert cold.source is DashboardSource.DATABASE
    assert warm.source is DashboardSource.CACHE
    assert warm.data == cold.data
    assert data_source.fetch_tier.await_count == 3
    assert sorted(ttl for _, _, ttl in fake_cache.sets) == [30, 3600, 86400]


async def test_partial_hit_refetches_every_tier(service, fake_cache, data_source) -> None:
    fake_cache.store[service.tier_key(CacheTier.REALTIME, "user-1", "month")] = {"activeDeals": 99}
    fake_cache.store[service.tier_key(CacheTier.HOURLY, "user-1", "month")] = {"sales": {}}

    summary = await service.get_summary("user-1")

    assert summary.source is DashboardSource.DATABASE
    assert data_source.fetch_tier.await_count == 3
    assert summary.data["activeDeals"] == 2


async def test_single_tier_failure_uses_default(service, data_source, runner, fake_cache) -> None:
    async def fetch_tier(tier, principal_id, time_range):
        if tier is CacheTier.HOURLY:
            raise RuntimeError("timeout")
        return FRESH[tier]

    data_source.fetch_tier.side_effect = fetch_tier
    summary = await service.get_summary("user-1")
    await runner.drain()

    assert summary.success is True
    assert summary.data["sales"] == empty_tier_payload(CacheTier.HOURLY)["sales"]
    assert summary.data["recentLeads"] == [{"id": "l1"}]
    assert summary.data["overview"] == {"leads": {"total": 9}}
    written = {key.split(":")[2] for key, _, _ in fake_cache.sets}
    assert written == {"realtime", "daily"}


async def test_cache_errors_count_as_misses(service, fake_cache, data_source) -> None:
    fake_cache.fail_get = True
    summary = await service.get_summary("user-1")
    assert summary.source is DashboardSource.DATABASE


async def test_no_cache_still_serves_data(data_source, runner) -> None:
    svc = TieredDashboardService(data_source, None, runner, TTLS)
    summary = await svc.get_summary("user-1", include="daily")
    assert summary.source is DashboardSource.DATABASE
    assert summary.data == FRESH[CacheTier.DAILY]
    assert runner.pending == 0


async def test_include_single_tier(service, data_source) -> None:
    summary = await service.get_summary("user-1", include="realtime")
    assert summary.tiers == [CacheTier.REALTIME]
    data_source.fetch_tier.assert_awaited_once_with(CacheTier.REALTIME, "user-1", "month")


async def test_keys_are_scoped_by_principal_and_range(service, runner, fake_cache) -> None:
    await service.get_summary("user-1", time_range="quarter", include="daily")
    await runner.drain()
    assert [key for key, _, _ in fake_cache.sets] == ["dashboard:v1:daily:user-1:quarter"]


async def test_write_failure_is_logged_not_raised(service, runner, fake_cache) -> None:
    fake_cache.set = AsyncMock(side_effect=RuntimeError("redis gone"))
    summary = await service.get_summary("user-1")
    await runner.drain()
    assert summary.source is DashboardSource.DATABASE
    assert runner.failed_count == 3


async def test_health_reports_components(service, data_source) -> None:
    data_source.ping.return_value = False
    assert await service.health() == {"service": True, "cache": True, "database": False}


def test_resolve_tiers() -> None:
    assert resolve_tiers(None) == [CacheTier.REALTIME, CacheTier.HOURLY, CacheTier.DAILY]
    assert resolve_tiers("Hourly") == [CacheTier.HOURLY]
    with pytest.raises(ValidationException):
        resolve_tiers("weekly")


def test_resolve_time_range() -> None:
    assert resolve_time_range(None) == "month"
    assert resolve_time_range(" Quarter ") == "quarter"
    assert [resolve_time_range(b) for b in ("week", "year")] == ["week", "year"]
    assert resolve_time_range("2w") == "month"


async def test_principal_with_separator_is_served_and_cached(service, runner, fake_cache) -> None:
    summary = await service.get_summary("google-oauth2:123", include="realtime")
    await runner.drain()
    assert summary.source is DashboardSource.DATABASE
    assert summary.data == FRESH[CacheTier.REALTIME]
    assert [key for key, _, _ in fake_cache.sets] == [
        "dashboard:v1:realtime:google-oauth2%3A123:month"
    ]
    warm = await service.get_summary("google-oauth2:123", include="realtime")
    assert warm.source is DashboardSource.CACHE


async def test_principal_with_separator_without_cache(data_source, runner) -> None:
    svc = TieredDashboardService(data_source, None, runner, TTLS)
    summary = await svc.get_summary("google-oauth2:123", include="daily")
    assert summary.data == FRESH[CacheTier.DAILY]
