"""Relevance ranker: exact > prefix > substring, stable and idempotent."""

from crm_search.application.dtos.search import LeadMetadata, SearchResult
from crm_search.application.services.relevance_ranker import rank, relevance_key
from crm_search.domain.enums import SearchCategory


def _result(title: str, result_id: str | None = None) -> SearchResult:
    return SearchResult(
        id=result_id or title,
        title=title,
        subtitle="",
        description="",
        url="/app/leads",
        category=SearchCategory.LEADS,
        icon="UserPlus",
        metadata=LeadMetadata(status="NEW"),
    )


def test_exact_before_prefix_before_substring() -> None:
    results = [_result("Big Acme"), _result("Acme Corp"), _result("acme")]
    ranked = rank(results, "acme")
    assert [r.title for r in ranked] == ["acme", "Acme Corp", "Big Acme"]


def test_ties_keep_input_order() -> None:
    results = [_result("Acme B", "2"), _result("Acme A", "1"), _result("Acme C", "3")]
    ranked = rank(results, "acme")
    assert [r.id for r in ranked] == ["2", "1", "3"]


def test_ranking_is_idempotent() -> None:
    results = [_result("x acme"), _result("Acme"), _result("acme two"), _result("Acmeish")]
    once = rank(results, "acme")
    assert rank(once, "acme") == once


def test_case_and_whitespace_are_ignored() -> None:
    assert relevance_key("ACME", "  acme ") == (False, False, False)


def test_non_matching_titles_sort_last() -> None:
    ranked = rank([_result("Globex"), _result("Acme Inc")], "acme")
    assert [r.title for r in ranked] == ["Acme Inc", "Globex"]
