"""Cache configuration settings.

This module provides centralized configuration management using environment
variables with sensible defaults.
"""

import os
from dataclasses import dataclass

from plugin_cache.errors import CacheConfigError


def _get_int_env(name: str, default: int) -> int:
    """Get an integer value from environment variable.

    Args:
        name: Environment variable name.
        default: Default value if not set.

    Returns:
        Integer value from environment.

    Raises:
        CacheConfigError: If the variable is set but not an integer.
    """
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise CacheConfigError(
            f"{name} must be an integer, got {value!r}",
            field=name,
        ) from e


@dataclass
class Settings:
    """Cache settings loaded from environment variables.

    Attributes:
        CACHE_STORE: Backend store to use ("memory", "redis" or "none").
        REDIS_URL: Redis connection URL when CACHE_STORE is "redis".
        CACHE_DEFAULT_TTL: TTL in seconds for entries set without one.
        CACHE_ON_ERROR: Failure posture for clients ("returnEmpty" or "reject").
        CACHE_MAX_KEY_LENGTH: Longest key sent to the backend before hashing.
        LOG_LEVEL: Logging level.
    """

    CACHE_STORE: str = "memory"
    REDIS_URL: str = "redis://localhost:6379"

    CACHE_DEFAULT_TTL: int = 300  # 5 minutes
    CACHE_ON_ERROR: str = "returnEmpty"
    # Memcached rejects keys over 250 bytes; most other stores accept more.
    CACHE_MAX_KEY_LENGTH: int = 250

    # Logging
    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables.

        Returns:
            Settings instance populated from environment.
        """
        return cls(
            CACHE_STORE=os.getenv("CACHE_STORE", "memory").strip().lower(),
            REDIS_URL=os.getenv("REDIS_URL", "redis://localhost:6379"),
            CACHE_DEFAULT_TTL=_get_int_env("CACHE_DEFAULT_TTL", 300),
            CACHE_ON_ERROR=os.getenv("CACHE_ON_ERROR", "returnEmpty"),
            CACHE_MAX_KEY_LENGTH=_get_int_env("CACHE_MAX_KEY_LENGTH", 250),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        )
