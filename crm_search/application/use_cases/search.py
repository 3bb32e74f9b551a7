"""Federated quick search use case.

Fans a query out to every selected entity adapter concurrently, normalizes
their rows, merges in registry order and ranks globally.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Collection, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from crm_search.application.dtos.search import SearchResponse, SearchResult
from crm_search.application.services.relevance_ranker import rank
from crm_search.application.services.result_normalizer import normalize_rows
from crm_search.domain.enums import SearchCategory

if TYPE_CHECKING:
    from crm_search.application.interfaces.repositories import IEntitySearchAdapter

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"

# Names accepted in the categories filter besides the enum values
CATEGORY_ALIASES: dict[str, SearchCategory] = {
    "secondBrain": SearchCategory.KNOWLEDGE,
}


def resolve_categories(
    categories: str | Collection[str] | None,
) -> set[SearchCategory]:
    """Turn "all", a comma-separated string or a collection into categories.

    Unknown names are ignored. None and an empty selection both mean all.
    "secondBrain" selects knowledge.
    """
    if categories is None:
        return set(SearchCategory)
    if isinstance(categories, str):
        names = [c.strip() for c in categories.split(",")]
    else:
        names = [str(c).strip() for c in categories]
    names = [n for n in names if n]
    if not names or ALL_CATEGORIES in names:
        return set(SearchCategory)
    valid = set(SearchCategory.values())
    selected = {SearchCategory(n) for n in names if n in valid}
    selected.update(CATEGORY_ALIASES[n] for n in names if n in CATEGORY_ALIASES)
    return selected


class SearchService:
    """Quick search across CRM entities for one principal.

    Adapter order is the merge order; keep it fixed so ranking ties
    resolve the same way on every call.
    """

    def __init__(
        self,
        adapters: Sequence["IEntitySearchAdapter"],
        min_query_length: int = 2,
        default_limit: int = 5,
        max_limit: int = 50,
    ) -> None:
        self.adapters = list(adapters)
        self.min_query_length = min_query_length
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def search(
        self,
        principal_id: str,
        query: str,
        categories: str | Collection[str] | None = ALL_CATEGORIES,
        limit: int | None = None,
    ) -> SearchResponse:
        """Search within the principal's rows.

        limit is clamped to max_limit. Counts in the response are the
        results shown per category, so they are capped by limit rather than
        being a true total.
        """
        normalized = (query or "").strip().lower()
        if len(normalized) < self.min_query_length:
            return SearchResponse.empty(query)

        per_category = min(limit if limit is not None else self.default_limit, self.max_limit)
        selected = resolve_categories(categories)
        dispatched = [a for a in self.adapters if a.category in selected]

        row_sets = await asyncio.gather(
            *(
                self._run_adapter(adapter, principal_id, normalized, per_category)
                for adapter in dispatched
            )
        )

        merged: list[SearchResult] = []
        counts: dict[str, int] = {}
        for adapter, rows in zip(dispatched, row_sets):
            results = normalize_rows(
                rows, adapter.category, adapter.icon, adapter.sub_category
            )
            merged.extend(results)
            key = adapter.category.value
            counts[key] = counts.get(key, 0) + len(results)

        ranked = rank(merged, normalized)
        return SearchResponse(
            query=query,
            results=ranked,
            total_count=len(ranked),
            categories=counts,
        )

    async def _run_adapter(
        self,
        adapter: "IEntitySearchAdapter",
        principal_id: str,
        query: str,
        limit: int,
    ) -> Sequence[Mapping[str, Any]]:
        """Run one adapter; an unexpected failure yields no rows for that category."""
        try:
            return await adapter.search(principal_id, query, limit)
        except Exception:
            logger.exception(
                "Search adapter failed: category=%s sub_category=%s",
                adapter.category.value,
                adapter.sub_category,
            )
            return []
