"""Cache manager handing out per-plugin clients over one backend.

The manager owns the backend connection; plugins only ever see a
NamespacedCacheClient scoped to their own id.
"""

from typing import Any

import structlog

from plugin_cache.cache.backends import (
    CacheBackend,
    InMemoryCacheBackend,
    NullCacheBackend,
    RedisCacheBackend,
)
from plugin_cache.cache.client import (
    DEFAULT_MAX_KEY_LENGTH,
    NamespacedCacheClient,
    OnError,
)
from plugin_cache.config import Settings
from plugin_cache.errors import CacheConfigError

logger = structlog.get_logger(__name__)

CACHE_STORES = ("memory", "redis", "none")


class CacheManager:
    """Shared backend plus client defaults for every plugin.

    Example:
        manager = CacheManager.from_settings(Settings.from_env())
        cache = manager.for_plugin("catalog").get_client(default_ttl=60)
    """

    def __init__(
        self,
        backend: CacheBackend,
        *,
        default_ttl: int = 300,
        default_on_error: OnError | str = OnError.RETURN_EMPTY,
        max_key_length: int = DEFAULT_MAX_KEY_LENGTH,
    ) -> None:
        """Initialize cache manager.

        Args:
            backend: Backend shared by every client this manager creates.
            default_ttl: TTL used by clients created without one.
            default_on_error: Error policy used by clients created without one.
            max_key_length: Key length bound passed to every client.
        """
        self.backend = backend
        self.default_ttl = default_ttl
        self.default_on_error = OnError.parse(default_on_error)
        self.max_key_length = max_key_length

    @classmethod
    def from_settings(cls, settings: Settings) -> "CacheManager":
        """Create a manager with the backend selected by settings.

        Args:
            settings: Cache settings.

        Returns:
            Configured cache manager.

        Raises:
            CacheConfigError: If CACHE_STORE names an unknown store.
        """
        store = settings.CACHE_STORE
        backend: CacheBackend
        if store == "memory":
            backend = InMemoryCacheBackend()
        elif store == "redis":
            backend = RedisCacheBackend.from_url(settings.REDIS_URL)
        elif store == "none":
            backend = NullCacheBackend()
        else:
            raise CacheConfigError(
                f"Unknown cache store {store!r}",
                field="CACHE_STORE",
                details={"allowed": list(CACHE_STORES)},
            )

        logger.info("cache_manager_created", store=store)
        return cls(
            backend,
            default_ttl=settings.CACHE_DEFAULT_TTL,
            default_on_error=settings.CACHE_ON_ERROR,
            max_key_length=settings.CACHE_MAX_KEY_LENGTH,
        )

    def for_plugin(self, plugin_id: str) -> "PluginCacheManager":
        """Scope the manager to one plugin.

        Args:
            plugin_id: Plugin id used as the key namespace.

        Returns:
            Plugin-scoped manager.
        """
        if not plugin_id:
            raise CacheConfigError("plugin_id must be a non-empty string", field="plugin_id")
        return PluginCacheManager(self, plugin_id)

    async def aclose(self) -> None:
        """Close the backend if it holds connections."""
        close: Any = getattr(self.backend, "aclose", None)
        if close is not None:
            await close()
        logger.info("cache_manager_closed")


class PluginCacheManager:
    """Cache manager bound to a single plugin id."""

    def __init__(self, manager: CacheManager, plugin_id: str) -> None:
        self.manager = manager
        self.plugin_id = plugin_id

    def get_client(
        self,
        default_ttl: int | None = None,
        on_error: OnError | str | None = None,
    ) -> NamespacedCacheClient:
        """Create a client namespaced to this plugin.

        Args:
            default_ttl: TTL in seconds for entries set without one.
            on_error: Error policy for the client.

        Returns:
            NamespacedCacheClient sharing the manager's backend.
        """
        return NamespacedCacheClient.create(
            self.manager.backend,
            namespace=self.plugin_id,
            default_ttl=self.manager.default_ttl if default_ttl is None else default_ttl,
            on_error=self.manager.default_on_error if on_error is None else on_error,
            max_key_length=self.manager.max_key_length,
        )
