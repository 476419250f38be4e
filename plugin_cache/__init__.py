"""Namespaced cache clients for plugins sharing one cache backend.

This package contains:
- NamespacedCacheClient for per-plugin key isolation and JSON serialization
- CacheManager for handing out clients that share a single backend
- Bundled backends (memory, Redis, null)
- Settings loaded from environment variables
"""

from plugin_cache.cache import (
    CacheBackend,
    CacheManager,
    ClientConfig,
    InMemoryCacheBackend,
    NamespacedCacheClient,
    NullCacheBackend,
    OnError,
    PluginCacheManager,
    RedisCacheBackend,
)
from plugin_cache.config import Settings
from plugin_cache.errors import CacheConfigError, PluginCacheError
from plugin_cache.logging import configure_logging

__all__ = [
    "CacheBackend",
    "CacheConfigError",
    "CacheManager",
    "ClientConfig",
    "InMemoryCacheBackend",
    "NamespacedCacheClient",
    "NullCacheBackend",
    "OnError",
    "PluginCacheError",
    "PluginCacheManager",
    "RedisCacheBackend",
    "Settings",
    "configure_logging",
]
