"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
Settings are loaded inside create_app() so tests can set env (and clear
the get_settings cache) before calling it.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from crm_search.api.v1 import api_router
from crm_search.application.services.background_tasks import BackgroundTaskRunner
from crm_search.core.config import get_settings
from crm_search.core.exception_handlers import register_exception_handlers
from crm_search.core.lifespan import create_lifespan
from crm_search.core.limiter import limiter
from crm_search.middleware import RequestContextMiddleware


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.state.cache = None
    app.state.background_tasks = BackgroundTaskRunner()
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # First added = innermost: request context wraps CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RequestContextMiddleware,
        header_name=settings.request_id_header,
        timeout_seconds=settings.request_timeout_seconds,
    )

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
