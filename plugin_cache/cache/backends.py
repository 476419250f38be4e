"""Cache backends consumed by namespaced clients.

Every backend speaks plain strings: keys are already normalized and values
are already serialized by the time they arrive here.
"""

import time
from dataclasses import dataclass
from typing import Protocol

import structlog
from redis.asyncio import Redis

logger = structlog.get_logger(__name__)


class CacheBackend(Protocol):
    """Minimal get/set/delete contract wrapped by NamespacedCacheClient."""

    async def get(self, key: str) -> str | bytes | None: ...

    async def set(self, key: str, value: str, *, ttl: int) -> None: ...

    async def delete(self, key: str) -> None: ...


class NullCacheBackend:
    """Backend that stores nothing; every read is a miss."""

    async def get(self, key: str) -> None:  # noqa: ARG002
        return None

    async def set(self, key: str, value: str, *, ttl: int) -> None:  # noqa: ARG002
        return None

    async def delete(self, key: str) -> None:  # noqa: ARG002
        return None


@dataclass(frozen=True)
class _Entry:
    value: str
    expires_at: float


class InMemoryCacheBackend:
    """Process-local backend suitable for development and tests.

    Entries expire ``ttl`` seconds after being set; expired entries are
    dropped lazily when read.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= time.monotonic():
            self._entries.pop(key, None)
            return None
        return entry.value

    async def set(self, key: str, value: str, *, ttl: int) -> None:
        self._entries[key] = _Entry(value=value, expires_at=time.monotonic() + ttl)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()


class RedisCacheBackend:
    """Redis-backed cache for multi-process deployments.

    Example:
        backend = RedisCacheBackend.from_url("redis://localhost:6379")
        await backend.set("key", "value", ttl=60)
    """

    def __init__(self, redis: Redis) -> None:
        """Initialize backend.

        Args:
            redis: Redis client instance. Ownership stays with the caller
                unless the backend was built with ``from_url``.
        """
        self.redis = redis

    @classmethod
    def from_url(cls, url: str) -> "RedisCacheBackend":
        """Create a backend with its own connection pool.

        Args:
            url: Redis connection URL.

        Returns:
            Backend wrapping a new ``redis.asyncio.Redis`` client.
        """
        return cls(Redis.from_url(url))

    async def get(self, key: str) -> str | None:
        data = await self.redis.get(key)
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return data

    async def set(self, key: str, value: str, *, ttl: int) -> None:
        await self.redis.setex(key, ttl, value)

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)

    async def aclose(self) -> None:
        """Close the underlying Redis connection pool."""
        await self.redis.aclose()
        logger.debug("redis_backend_closed")
