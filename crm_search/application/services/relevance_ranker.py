"""Relevance ranking for merged search results.

Three-level ladder on the lower-cased title: exact match, then prefix,
then substring. Python's sort is stable, so equal-rank results keep their
input (registry) order and ranking a ranked list is a no-op.
"""

from collections.abc import Iterable

from crm_search.application.dtos.search import SearchResult


def relevance_key(title: str, query: str) -> tuple[bool, bool, bool]:
    """Sort key where False sorts first: (not exact, not prefix, not contains).

    Args:
        title: Result title (any case).
        query: Search query (any case, surrounding whitespace ignored).
    """
    t = (title or "").lower()
    q = (query or "").strip().lower()
    return (t != q, not t.startswith(q), q not in t)


def rank(results: Iterable[SearchResult], query: str) -> list[SearchResult]:
    """Return results ordered by relevance to query (stable)."""
    return sorted(results, key=lambda r: relevance_key(r.title, query))
