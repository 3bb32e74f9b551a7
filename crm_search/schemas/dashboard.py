"""Dashboard API schemas."""

from typing import Any

from pydantic import Field

from crm_search.application.dtos.dashboard import DashboardSummary
from crm_search.domain.enums import DashboardSource
from crm_search.schemas.base import CamelModel


class DashboardSummaryResponse(CamelModel):
    """Merged tier data tagged with where it came from."""

    success: bool = True
    data: dict[str, Any] = Field(default_factory=dict)
    source: DashboardSource
    response_time: int = Field(..., description="Milliseconds spent serving the request")
    timestamp: str = Field(..., description="ISO-8601 UTC")

    @classmethod
    def from_dto(cls, summary: DashboardSummary) -> "DashboardSummaryResponse":
        return cls(
            success=summary.success,
            data=summary.data,
            source=summary.source,
            response_time=summary.response_time_ms,
            timestamp=summary.timestamp,
        )


class DashboardHealthResponse(CamelModel):
    service: bool = True
    cache: bool
    database: bool
