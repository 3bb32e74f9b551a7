"""Pytest configuration and fixtures for crm-search.

Environment is pinned before the app is imported: a test secret, Redis
and telemetry off, no database (routes get their services through
dependency overrides; integration tests build their own SQLite engine).
"""

import os

os.environ["SECRET_KEY"] = "test-secret-key-for-crm-search"
os.environ["REDIS_ENABLED"] = "false"
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["DATABASE_URL"] = ""

from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from crm_search.core.config import get_settings  # noqa: E402
from crm_search.core.limiter import limiter  # noqa: E402
from crm_search.infrastructure.security.jwt import create_access_token  # noqa: E402
from crm_search.main import app  # noqa: E402

get_settings.cache_clear()


class FakeCache:
    """In-memory ICacheStore. Records set() calls; can be told to fail."""

    def __init__(self, available: bool = True) -> None:
        self.store: dict[str, Any] = {}
        self.sets: list[tuple[str, Any, int]] = []
        self.available = available
        self.fail_get = False

    def is_available(self) -> bool:
        return self.available

    async def get(self, key: str) -> Any:
        if self.fail_get:
            raise ConnectionError("cache down")
        return self.store.get(key)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self.sets.append((key, value, ttl))
        self.store[key] = value
        return True

    async def ping(self) -> bool:
        return self.available


@pytest.fixture(autouse=True)
def _reset_app_state():
    """Fresh dependency overrides and no rate limiting for every test."""
    limiter.enabled = False
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


def _bearer(principal_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(principal_id)}"}


@pytest.fixture
def bearer():
    """Build an Authorization header for a principal id (signed with the test secret)."""
    return _bearer


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return _bearer("user-1")
