"""Read-only repositories over the CRM tables."""

from crm_search.infrastructure.persistence.repositories.dashboard_repo import (
    DashboardRepository,
)
from crm_search.infrastructure.persistence.repositories.search_adapters import (
    SqlEntitySearchAdapter,
    build_search_adapters,
)

__all__ = ["DashboardRepository", "SqlEntitySearchAdapter", "build_search_adapters"]
