"""Application use cases: one entry point per workflow."""

from crm_search.application.use_cases.dashboard import TieredDashboardService
from crm_search.application.use_cases.search import SearchService

__all__ = ["SearchService", "TieredDashboardService"]
