"""Search and dashboard use case dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from crm_search.application.services.background_tasks import BackgroundTaskRunner
from crm_search.application.use_cases.dashboard import TieredDashboardService
from crm_search.application.use_cases.search import SearchService
from crm_search.core.config import get_settings
from crm_search.infrastructure.persistence.database import get_session_factory
from crm_search.infrastructure.persistence.repositories import (
    DashboardRepository,
    build_search_adapters,
)


def get_session_factory_dep() -> async_sessionmaker[AsyncSession]:
    """Session factory; 503 via SqlNotConfiguredException when DATABASE_URL is unset."""
    return get_session_factory()


def get_search_service(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_session_factory_dep)
    ],
) -> SearchService:
    """SearchService over the full adapter registry."""
    settings = get_settings()
    return SearchService(
        build_search_adapters(session_factory),
        min_query_length=settings.search_min_query_length,
        default_limit=settings.search_default_limit,
        max_limit=settings.search_max_limit,
    )


def _task_runner(request: Request) -> BackgroundTaskRunner:
    runner = getattr(request.app.state, "background_tasks", None)
    if runner is None:
        runner = BackgroundTaskRunner()
        request.app.state.background_tasks = runner
    return runner


def get_dashboard_service(
    request: Request,
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_session_factory_dep)
    ],
) -> TieredDashboardService:
    """TieredDashboardService with the app's cache (None when Redis is off)."""
    settings = get_settings()
    return TieredDashboardService(
        data_source=DashboardRepository(session_factory),
        cache=getattr(request.app.state, "cache", None),
        task_runner=_task_runner(request),
        tier_ttls=settings.tier_ttls(),
        cache_version=settings.dashboard_cache_version,
    )
