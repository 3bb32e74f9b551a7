"""Dashboard API: tier-cached summary and health."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from crm_search.api.v1.dependencies import get_current_principal, get_dashboard_service
from crm_search.application.dtos.principal import Principal
from crm_search.application.use_cases.dashboard import TieredDashboardService
from crm_search.core.constants import DEFAULT_TIME_RANGE
from crm_search.core.limiter import limit_dashboard
from crm_search.schemas.dashboard import (
    DashboardHealthResponse,
    DashboardSummaryResponse,
)

router = APIRouter()


@router.get("/summary", response_model=DashboardSummaryResponse)
@limit_dashboard
async def dashboard_summary(
    request: Request,
    principal: Annotated[Principal, Depends(get_current_principal)],
    dashboard_svc: Annotated[TieredDashboardService, Depends(get_dashboard_service)],
    time_range: str = Query(DEFAULT_TIME_RANGE, alias="timeRange"),
    include: str = Query("all", description="all | realtime | hourly | daily"),
) -> DashboardSummaryResponse:
    """Merged dashboard data; source is 'cache' only when every tier hit."""
    summary = await dashboard_svc.get_summary(
        principal.id, time_range=time_range, include=include
    )
    return DashboardSummaryResponse.from_dto(summary)


@router.get("/health", response_model=DashboardHealthResponse)
async def dashboard_health(
    dashboard_svc: Annotated[TieredDashboardService, Depends(get_dashboard_service)],
) -> DashboardHealthResponse:
    """Cache and database reachability."""
    return DashboardHealthResponse(**await dashboard_svc.health())
