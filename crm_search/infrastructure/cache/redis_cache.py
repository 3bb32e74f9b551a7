"""Redis-backed cache store for dashboard tiers.

Values are JSON-serialized and written with SETEX. Every failure degrades
to a miss (get -> None, set -> False) so callers can always fall back to
fresh data. One reconnect is attempted on connection errors.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from crm_search.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheService:
    """Async Redis cache with TTL support.

    Call connect() at startup and disconnect() at shutdown. A client can
    be injected for tests; it is then considered connected.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. On failure the cache stays disabled."""
        if self.redis is not None:
            return
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=(
                self.settings.redis_password.get_secret_value()
                if self.settings.redis_password
                else None
            ),
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            await client.aclose()
            self._connected = False
            return
        self.redis = client
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError:
                logger.debug("Ignoring error while closing stale Redis client")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _run(
        self,
        op: str,
        key: str,
        call: Callable[[redis.Redis], Awaitable[T]],
        default: T,
    ) -> T:
        """Run call against Redis with one reconnect; return default on failure."""
        if not self.is_available() or self.redis is None:
            return default
        try:
            return await call(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                try:
                    return await call(self.redis)
                except redis.RedisError:
                    logger.exception("Cache %s error for %s after reconnect", op, key)
                    return default
            logger.warning("Cache %s unavailable for %s (Redis disconnected)", op, key)
            return default
        except redis.RedisError:
            logger.exception("Cache %s error for %s", op, key)
            return default

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable."""
        raw = await self._run("get", key, lambda r: r.get(key), None)
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            value = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Cache entry for %s is not valid JSON; ignoring", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds. Returns True on success."""
        serialized = json.dumps(value)

        async def _setex(r: redis.Redis) -> bool:
            await r.setex(key, ttl, serialized)
            return True

        stored = await self._run("set", key, _setex, False)
        if stored:
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return stored

    async def ping(self) -> bool:
        """Return True if Redis answers PING."""
        return bool(await self._run("ping", "-", lambda r: r.ping(), False))
