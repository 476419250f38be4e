"""Namespaced caching over a shared backend.

This module contains:
- NamespacedCacheClient for per-plugin keys, serialization and error policy
- CacheManager for creating clients that share one backend
- Backends implementing the get/set/delete contract
"""

from plugin_cache.cache.backends import (
    CacheBackend,
    InMemoryCacheBackend,
    NullCacheBackend,
    RedisCacheBackend,
)
from plugin_cache.cache.client import (
    DEFAULT_MAX_KEY_LENGTH,
    HASHED_KEY_LENGTH,
    ClientConfig,
    NamespacedCacheClient,
    OnError,
    deserialize,
    normalize_key,
    serialize,
)
from plugin_cache.cache.manager import CacheManager, PluginCacheManager

__all__ = [
    # Core classes
    "ClientConfig",
    "NamespacedCacheClient",
    "OnError",
    # Backends
    "CacheBackend",
    "InMemoryCacheBackend",
    "NullCacheBackend",
    "RedisCacheBackend",
    # Managers
    "CacheManager",
    "PluginCacheManager",
    # Configuration
    "DEFAULT_MAX_KEY_LENGTH",
    "HASHED_KEY_LENGTH",
    # Utilities
    "deserialize",
    "normalize_key",
    "serialize",
]
