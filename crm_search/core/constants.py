"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure and dashboard time ranges.
"""

from datetime import timedelta

# Cache key prefix for dashboard tiers (dashboard:<version>:<tier>:<principal>:<range>)
CACHE_PREFIX_DASHBOARD = "dashboard"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Dashboard time-range buckets accepted by /dashboard/summary; unknown values fall back to the default
DEFAULT_TIME_RANGE = "month"
TIME_RANGE_DELTAS: dict[str, timedelta] = {
    "week": timedelta(days=7),
    "month": timedelta(days=30),
    "quarter": timedelta(days=90),
    "year": timedelta(days=365),
}

# Realtime widgets
RECENT_LEADS_LIMIT = 10
RECENT_ACTIVITIES_LIMIT = 20

# Notes are excerpted in search results
NOTE_EXCERPT_LENGTH = 100
