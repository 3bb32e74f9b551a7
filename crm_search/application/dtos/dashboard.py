"""DTOs for the tiered dashboard summary.

Tier payloads are plain JSON values so they round-trip through the cache
unchanged. Key sets of the three tiers are disjoint; merging is a shallow
key union.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from crm_search.domain.enums import CacheTier, DashboardSource

TierPayload = dict[str, Any]


def empty_tier_payload(tier: CacheTier) -> TierPayload:
    """Return the all-zero payload substituted when a tier fetch fails."""
    if tier is CacheTier.REALTIME:
        return {
            "recentLeads": [],
            "recentActivities": [],
            "activeDeals": 0,
            "todayStats": {"leads": 0, "activities": 0},
        }
    if tier is CacheTier.HOURLY:
        return {
            "sales": {
                "leads": {"total": 0, "qualified": 0},
                "opportunities": {"total": 0, "pipelineValue": 0},
                "deals": {"total": 0, "won": 0, "revenue": 0},
            },
            "marketing": {
                "forms": {"total": 0, "submissions": 0},
                "campaigns": {"total": 0, "active": 0},
            },
            "opportunities": {"byStage": {}},
        }
    return {
        "overview": {
            "forms": {"total": 0, "submissions": 0},
            "contacts": {"total": 0},
            "leads": {"total": 0},
            "opportunities": {"total": 0},
            "deals": {"total": 0},
            "marketing": {"campaigns": 0},
        },
        "forms": {"total": 0, "published": 0, "submissions": 0},
        "profitLoss": {"revenue": 0, "dealsWon": 0, "pipelineValue": 0},
    }


def merge_tier_payloads(payloads: dict[CacheTier, TierPayload]) -> TierPayload:
    """Shallow key union of tier payloads in tier order (realtime, hourly, daily)."""
    merged: TierPayload = {}
    for tier in CacheTier:
        if tier in payloads:
            merged.update(payloads[tier])
    return merged


@dataclass(frozen=True)
class DashboardSummary:
    """Merged dashboard data with provenance and timing."""

    data: TierPayload
    source: DashboardSource
    response_time_ms: int
    timestamp: str
    tiers: list[CacheTier] = field(default_factory=list)
    success: bool = True
