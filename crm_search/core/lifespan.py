"""Application lifespan: startup and shutdown.

Wiring only: Redis cache, telemetry, background write drain and the SQL
engine. Shutdown drains pending cache writes before the cache closes.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from crm_search.core.config import get_settings
from crm_search.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, Redis cache (if enabled), telemetry (if
    enabled). Shutdown order: drain background writes, cache disconnect,
    telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if settings.redis_enabled:
        from crm_search.infrastructure.cache.redis_cache import CacheService

        cache = CacheService(settings=settings)
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None
        logger.info("Redis disabled; dashboard served uncached")

    if settings.telemetry_enabled:
        from crm_search.infrastructure.persistence import database
        from crm_search.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig.from_settings(settings)
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()
        if settings.redis_enabled:
            telemetry.instrument_redis()
        database._ensure_engine()
        if database.engine is not None:
            telemetry.instrument_sqlalchemy(database.engine)

    yield

    # ---- Shutdown ----
    runner = getattr(app.state, "background_tasks", None)
    if runner is not None and runner.pending:
        logger.info("Waiting for %d pending cache writes", runner.pending)
        await runner.drain()

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        app.state.cache = None

    from crm_search.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)

    from crm_search.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
