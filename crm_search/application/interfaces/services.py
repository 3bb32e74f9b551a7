"""Service interfaces (ports): cache store and principal resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from crm_search.application.dtos.principal import Principal


class ICacheStore(Protocol):
    """Key-value store with TTL (e.g. Redis). Failures surface as misses."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds. Returns True on success."""

    async def ping(self) -> bool:
        """Return True if the backend answers."""


class IPrincipalResolver(Protocol):
    """Verify a bearer credential and return the caller."""

    def resolve(self, token: str) -> Principal:
        """Return Principal or raise AuthenticationException."""
