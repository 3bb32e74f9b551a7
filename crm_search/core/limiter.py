"""Rate limiter instance for SlowAPI.

Shared so main (app.state.limiter) and the endpoint modules use the same
instance. Limit strings come from settings and are resolved per request.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from crm_search.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def search_limit() -> str:
    return get_settings().search_rate_limit


def dashboard_limit() -> str:
    return get_settings().dashboard_rate_limit


limit_search = limiter.limit(search_limit)
limit_dashboard = limiter.limit(dashboard_limit)
