"""Domain enumerations for crm-search.

Enums represent fixed sets of domain values (searchable categories,
dashboard cache tiers, response sources).
"""

from enum import Enum


class SearchCategory(str, Enum):
    """Searchable entity category.

    KNOWLEDGE is split into sub-categories (nodes, maps, notes), each with
    its own adapter; counts for the category are summed across them.
    """

    LEADS = "leads"
    CONTACTS = "contacts"
    CAMPAIGNS = "campaigns"
    KNOWLEDGE = "knowledge"
    OPPORTUNITIES = "opportunities"
    ACTIVITIES = "activities"
    FORMS = "forms"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid category values as strings."""
        return [category.value for category in cls]


class KnowledgeKind(str, Enum):
    """Sub-category for knowledge artifacts (advertised, not yet released)."""

    NODES = "nodes"
    MAPS = "maps"
    NOTES = "notes"


class CacheTier(str, Enum):
    """Dashboard staleness class. Each tier has its own cache TTL."""

    REALTIME = "realtime"
    HOURLY = "hourly"
    DAILY = "daily"

    @classmethod
    def values(cls) -> list[str]:
        """Return tier values in merge order (realtime, hourly, daily)."""
        return [tier.value for tier in cls]


class DashboardSource(str, Enum):
    """Where a dashboard response was served from."""

    CACHE = "cache"
    DATABASE = "database"
