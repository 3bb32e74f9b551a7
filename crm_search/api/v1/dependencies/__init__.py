"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers; use cases are built from the
infrastructure implementations here.
"""

from crm_search.api.v1.dependencies.auth import (
    get_current_principal,
    get_principal_resolver,
)
from crm_search.api.v1.dependencies.search_dashboard import (
    get_dashboard_service,
    get_search_service,
    get_session_factory_dep,
)

__all__ = [
    "get_current_principal",
    "get_dashboard_service",
    "get_principal_resolver",
    "get_search_service",
    "get_session_factory_dep",
]
