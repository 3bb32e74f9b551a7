"""Search API: quick search across the caller's CRM entities."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from crm_search.api.v1.dependencies import get_current_principal, get_search_service
from crm_search.application.dtos.principal import Principal
from crm_search.application.use_cases.search import SearchService
from crm_search.core.limiter import limit_search
from crm_search.schemas.search import SearchResponse

router = APIRouter()


@router.get("", response_model=SearchResponse)
@limit_search
async def search(
    request: Request,
    principal: Annotated[Principal, Depends(get_current_principal)],
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str = Query("", max_length=500, description="Search text (min 2 chars)"),
    categories: str = Query(
        "all", description="Comma-separated categories, or 'all'"
    ),
    limit: int | None = Query(
        None, ge=1, description="Max results per category (clamped to the configured maximum)"
    ),
) -> SearchResponse:
    """Search within the caller's rows. Queries under 2 chars return no results."""
    result = await search_svc.search(
        principal_id=principal.id, query=q, categories=categories, limit=limit
    )
    return SearchResponse.from_dto(result)
