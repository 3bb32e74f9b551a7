"""API v1 router aggregation."""

from fastapi import APIRouter

from crm_search.api.v1.endpoints import dashboard, health, search

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
