"""Tiered dashboard summary use case.

Each tier (realtime, hourly, daily) is cached under its own key and TTL.
All requested tiers must hit for a cached response; any miss refetches
every requested tier so the response never mixes cached and fresh data.
Fresh tiers are written back in the background.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any

from crm_search.application.dtos.dashboard import (
    DashboardSummary,
    TierPayload,
    empty_tier_payload,
    merge_tier_payloads,
)
from crm_search.core.constants import DEFAULT_TIME_RANGE, TIME_RANGE_DELTAS
from crm_search.domain.enums import CacheTier, DashboardSource
from crm_search.domain.exceptions import ValidationException
from crm_search.infrastructure.cache.keys import dashboard_tier_key
from crm_search.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from crm_search.application.interfaces.repositories import IDashboardDataSource
    from crm_search.application.interfaces.services import ICacheStore
    from crm_search.application.services.background_tasks import BackgroundTaskRunner

logger = logging.getLogger(__name__)

INCLUDE_ALL = "all"


def resolve_tiers(include: str | None) -> list[CacheTier]:
    """Return requested tiers in merge order. include: all | realtime | hourly | daily."""
    value = (include or INCLUDE_ALL).strip().lower()
    if value == INCLUDE_ALL:
        return list(CacheTier)
    if value not in CacheTier.values():
        raise ValidationException(
            f"include must be one of: all, {', '.join(CacheTier.values())}",
            field="include",
        )
    return [CacheTier(value)]


def resolve_time_range(time_range: str | None) -> str:
    """Return the time-range bucket (week | month | quarter | year).

    Unknown or empty values fall back to month, so the bucket is also a
    safe cache key component.
    """
    value = (time_range or "").strip().lower()
    if value not in TIME_RANGE_DELTAS:
        if value:
            logger.debug("Unknown timeRange %r; using %s", time_range, DEFAULT_TIME_RANGE)
        return DEFAULT_TIME_RANGE
    return value


class TieredDashboardService:
    """Serve the dashboard aggregate from per-tier cache entries or fresh data."""

    def __init__(
        self,
        data_source: "IDashboardDataSource",
        cache: "ICacheStore | None",
        task_runner: "BackgroundTaskRunner",
        tier_ttls: dict[str, int],
        cache_version: str = "v1",
    ) -> None:
        self.data_source = data_source
        self.cache = cache
        self.task_runner = task_runner
        self.tier_ttls = tier_ttls
        self.cache_version = cache_version

    def tier_key(self, tier: CacheTier, principal_id: str, time_range: str) -> str:
        return dashboard_tier_key(
            self.cache_version, tier.value, principal_id, time_range
        )

    async def get_summary(
        self,
        principal_id: str,
        time_range: str | None = DEFAULT_TIME_RANGE,
        include: str | None = INCLUDE_ALL,
    ) -> DashboardSummary:
        """Return merged tier payloads tagged with source (cache or database)."""
        started = time.perf_counter()
        bucket = resolve_time_range(time_range)
        tiers = resolve_tiers(include)
        keys = {tier: self.tier_key(tier, principal_id, bucket) for tier in tiers}

        cached = await asyncio.gather(*(self._cache_get(keys[t]) for t in tiers))
        hits = {t: v for t, v in zip(tiers, cached) if isinstance(v, dict)}

        if len(hits) == len(tiers):
            logger.debug(
                "Dashboard cache hit: principal=%s tiers=%s", principal_id, tiers
            )
            return self._summary(hits, DashboardSource.CACHE, tiers, started)

        logger.info(
            "Dashboard cache miss (%d/%d hits) - fetching all tiers: principal=%s range=%s",
            len(hits),
            len(tiers),
            principal_id,
            bucket,
        )
        fetched = await asyncio.gather(
            *(self._fetch_tier(t, principal_id, bucket) for t in tiers)
        )
        payloads: dict[CacheTier, TierPayload] = {}
        for tier, (payload, ok) in zip(tiers, fetched):
            payloads[tier] = payload
            if ok:
                self._schedule_write(tier, keys[tier], payload)
        return self._summary(payloads, DashboardSource.DATABASE, tiers, started)

    async def health(self) -> dict[str, bool]:
        """Return service/cache/database health booleans."""
        cache_ok = False
        if self.cache is not None:
            try:
                cache_ok = await self.cache.ping()
            except Exception:
                logger.exception("Cache health check failed")
        try:
            db_ok = await self.data_source.ping()
        except Exception:
            logger.exception("Database health check failed")
            db_ok = False
        return {"service": True, "cache": cache_ok, "database": db_ok}

    async def _cache_get(self, key: str) -> Any:
        """Cache lookup; an unavailable or failing cache is a miss."""
        if self.cache is None or not self.cache.is_available():
            return None
        try:
            return await self.cache.get(key)
        except Exception:
            logger.warning("Cache get failed for %s; treating as miss", key, exc_info=True)
            return None

    async def _fetch_tier(
        self, tier: CacheTier, principal_id: str, time_range: str
    ) -> tuple[TierPayload, bool]:
        """Fetch one tier fresh. On failure return its empty default and ok=False."""
        try:
            payload = await self.data_source.fetch_tier(tier, principal_id, time_range)
            return payload, True
        except Exception:
            logger.exception(
                "Dashboard tier fetch failed: tier=%s principal=%s", tier.value, principal_id
            )
            return empty_tier_payload(tier), False

    def _schedule_write(self, tier: CacheTier, key: str, payload: TierPayload) -> None:
        if self.cache is None or not self.cache.is_available():
            return
        ttl = self.tier_ttls[tier.value]
        self.task_runner.spawn(
            self._cache_set(key, payload, ttl), name=f"dashboard-cache-write:{key}"
        )

    async def _cache_set(self, key: str, payload: TierPayload, ttl: int) -> None:
        stored = await self.cache.set(key, payload, ttl=ttl)
        if not stored:
            logger.warning("Dashboard tier not cached: %s", key)

    @staticmethod
    def _summary(
        payloads: dict[CacheTier, TierPayload],
        source: DashboardSource,
        tiers: list[CacheTier],
        started: float,
    ) -> DashboardSummary:
        return DashboardSummary(
            data=merge_tier_payloads(payloads),
            source=source,
            response_time_ms=int((time.perf_counter() - started) * 1000),
            timestamp=utc_now().isoformat(),
            tiers=tiers,
        )
