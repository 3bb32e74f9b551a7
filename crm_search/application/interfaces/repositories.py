"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain enums only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from crm_search.application.dtos.dashboard import TierPayload
    from crm_search.domain.enums import CacheTier, SearchCategory


class IEntitySearchAdapter(Protocol):
    """One searchable entity type. The orchestrator iterates a registry of these."""

    category: SearchCategory
    sub_category: str | None
    icon: str

    async def search(
        self, principal_id: str, query: str, limit: int
    ) -> Sequence[Mapping[str, Any]]:
        """Return up to limit raw rows owned by principal_id matching query.

        query is already trimmed and lower-cased. Data-source failures are
        logged and yield an empty sequence.
        """


class IDashboardDataSource(Protocol):
    """Fresh per-tier dashboard aggregates, scoped to the principal."""

    async def fetch_tier(
        self, tier: CacheTier, principal_id: str, time_range: str
    ) -> TierPayload:
        """Return the JSON payload for tier. May raise on data-source failure."""

    async def ping(self) -> bool:
        """Return True if the data source answers a trivial query."""
