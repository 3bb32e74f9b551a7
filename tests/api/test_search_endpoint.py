"""GET /api/v1/search with a fake SearchService behind dependency_overrides."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from crm_search.api.v1.dependencies import get_search_service
from crm_search.application.dtos.search import (
    KnowledgeNodeMetadata,
    LeadMetadata,
    SearchResponse,
    SearchResult,
)
from crm_search.domain.enums import KnowledgeKind, SearchCategory
from crm_search.main import app


def _response(query: str) -> SearchResponse:
    lead = SearchResult(
        id="l1",
        title="Acme Corp",
        subtitle="buyer@acme.test",
        description="",
        url="/app/leads",
        category=SearchCategory.LEADS,
        icon="UserPlus",
        metadata=LeadMetadata(status="QUALIFIED"),
    )
    node = SearchResult(
        id="n1",
        title="Acme pricing",
        subtitle="concept node",
        description="",
        url="/app/second-brain",
        category=SearchCategory.KNOWLEDGE,
        icon="Brain",
        metadata=KnowledgeNodeMetadata(node_type="concept", tags=("pricing",)),
        sub_category=KnowledgeKind.NODES.value,
        locked=True,
        lock_message="Coming soon",
    )
    return SearchResponse(
        query=query,
        results=[lead, node],
        total_count=2,
        categories={"leads": 1, "knowledge": 1},
    )


@pytest.fixture
def search_svc() -> AsyncMock:
    svc = AsyncMock()
    svc.search.side_effect = lambda principal_id, query, categories, limit: _response(query)
    app.dependency_overrides[get_search_service] = lambda: svc
    return svc


async def test_requires_bearer_token(client: AsyncClient, search_svc) -> None:
    response = await client.get("/api/v1/search", params={"q": "acme"})
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
    search_svc.search.assert_not_awaited()


async def test_invalid_token_is_401(client: AsyncClient, search_svc) -> None:
    response = await client.get(
        "/api/v1/search",
        params={"q": "acme"},
        headers={"Authorization": "Bearer nope"},
    )
    assert response.status_code == 401


async def test_returns_camel_case_results(client: AsyncClient, search_svc, auth_headers) -> None:
    response = await client.get(
        "/api/v1/search",
        params={"q": "acme", "categories": "leads,knowledge", "limit": 3},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["query"] == "acme"
    assert body["totalCount"] == 2
    assert body["categories"] == {"leads": 1, "knowledge": 1}
    lead, node = body["results"]
    assert lead["category"] == "leads"
    assert lead["metadata"] == {"kind": "lead", "status": "QUALIFIED"}
    assert node["subCategory"] == "nodes"
    assert node["locked"] is True
    assert node["lockMessage"] == "Coming soon"
    assert node["metadata"]["nodeType"] == "concept"
    search_svc.search.assert_awaited_once_with(
        principal_id="user-1", query="acme", categories="leads,knowledge", limit=3
    )


async def test_principal_comes_from_token(client: AsyncClient, search_svc, bearer) -> None:
    await client.get("/api/v1/search", params={"q": "acme"}, headers=bearer("user-2"))
    assert search_svc.search.await_args.kwargs["principal_id"] == "user-2"


@pytest.mark.parametrize("limit", [0, -1])
async def test_limit_below_one_is_422(client: AsyncClient, search_svc, auth_headers, limit) -> None:
    response = await client.get(
        "/api/v1/search", params={"q": "acme", "limit": limit}, headers=auth_headers
    )
    assert response.status_code == 422


async def test_large_limit_is_passed_to_service_for_clamping(client: AsyncClient, search_svc, auth_headers) -> None:
    response = await client.get(
        "/api/v1/search", params={"q": "acme", "limit": 500}, headers=auth_headers
    )
    assert response.status_code == 200
    assert search_svc.search.await_args.kwargs["limit"] == 500
