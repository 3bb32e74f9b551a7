"""Cache: Redis service and cache key builders."""

from crm_search.infrastructure.cache.keys import dashboard_tier_key
from crm_search.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheService", "dashboard_tier_key"]
