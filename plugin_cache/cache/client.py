"""Namespaced cache client shared by plugins.

Several plugins can share one cache backend without their keys colliding.
Each client prefixes keys with its namespace, keeps them within the
backend's key-length limit, stores values as JSON and applies one failure
posture to every operation.

Features:
- Deterministic, length-bounded physical keys (base64, or SHA-256 when long)
- JSON serialization of cached values
- Default TTL for entries set without one
- Configurable error policy: swallow failures or re-raise them unchanged
"""

import base64
import hashlib
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from plugin_cache.cache.backends import CacheBackend
from plugin_cache.errors import CacheConfigError

logger = structlog.get_logger(__name__)

# Memcached rejects keys over 250 bytes.
DEFAULT_MAX_KEY_LENGTH = 250

# base64 of a 32-byte SHA-256 digest
HASHED_KEY_LENGTH = 44


class OnError(Enum):
    """What a client does when the backend or stored data fails."""

    RETURN_EMPTY = "returnEmpty"  # Misses on get, silent success on set/delete
    REJECT = "reject"  # Re-raise the original exception

    @classmethod
    def parse(cls, value: "OnError | str") -> "OnError":
        """Resolve an enum member from a member or its configured value.

        Args:
            value: OnError member or one of "returnEmpty" / "reject".

        Returns:
            Matching OnError member.

        Raises:
            CacheConfigError: If the value is not recognized.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            allowed = ", ".join(repr(m.value) for m in cls)
            raise CacheConfigError(
                f"on_error must be one of {allowed}, got {value!r}",
                field="on_error",
            ) from e


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class ClientConfig:
    """Immutable configuration for a NamespacedCacheClient.

    Attributes:
        backend: Shared cache backend. Owned by the caller, never closed here.
        default_ttl: TTL in seconds used when set() is called without one.
        namespace: Plugin id prefixed to every key.
        on_error: Failure posture, as an OnError member or its string value.
        max_key_length: Longest base64 key sent before falling back to a hash.
    """

    backend: CacheBackend
    default_ttl: int
    namespace: str
    on_error: OnError | str = OnError.RETURN_EMPTY
    max_key_length: int = DEFAULT_MAX_KEY_LENGTH

    def __post_init__(self) -> None:
        if not isinstance(self.namespace, str) or not self.namespace:
            raise CacheConfigError(
                "namespace must be a non-empty string", field="namespace"
            )
        if not _is_positive_int(self.default_ttl):
            raise CacheConfigError(
                f"default_ttl must be a positive integer, got {self.default_ttl!r}",
                field="default_ttl",
            )
        if not _is_positive_int(self.max_key_length) or (
            self.max_key_length <= HASHED_KEY_LENGTH
        ):
            raise CacheConfigError(
                f"max_key_length must be an integer above {HASHED_KEY_LENGTH}, "
                f"got {self.max_key_length!r}",
                field="max_key_length",
            )
        object.__setattr__(self, "on_error", OnError.parse(self.on_error))


def normalize_key(
    namespace: str, key: str, max_length: int = DEFAULT_MAX_KEY_LENGTH
) -> str:
    """Derive the physical backend key for a namespaced logical key.

    The candidate ``"{namespace}:{key}"`` is base64 encoded. When that
    encoding is longer than ``max_length`` the SHA-256 digest of the
    candidate is base64 encoded instead, giving a fixed 44 character key.

    Args:
        namespace: Plugin id owning the key.
        key: Caller-supplied key fragment of any length.
        max_length: Longest encoded key allowed before hashing.

    Returns:
        Backend-safe key string.
    """
    candidate = f"{namespace}:{key}".encode()
    encoded = base64.b64encode(candidate).decode("ascii")
    if len(encoded) <= max_length:
        return encoded
    digest = hashlib.sha256(candidate).digest()
    return base64.b64encode(digest).decode("ascii")


def serialize(value: Any) -> str:
    """Serialize a value for caching.

    Args:
        value: JSON-representable value.

    Returns:
        JSON string representation.

    Raises:
        TypeError: If the value is not JSON-representable.
    """
    return json.dumps(value)


def deserialize(data: str | bytes) -> Any:
    """Deserialize a cached value.

    Args:
        data: Serialized data from cache.

    Returns:
        Deserialized value.

    Raises:
        ValueError: If the data is not valid JSON.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    return json.loads(data)


class NamespacedCacheClient:
    """Cache client confining one plugin to its own slice of a shared backend.

    The client holds no state besides its configuration, so concurrent
    calls need no coordination. Ordering of concurrent writes to one key is
    whatever the backend provides.

    Example:
        backend = InMemoryCacheBackend()
        cache = NamespacedCacheClient.create(
            backend, namespace="catalog", default_ttl=60
        )

        await cache.set("entity:component:default/foo", {"kind": "Component"})
        entity = await cache.get("entity:component:default/foo")
    """

    def __init__(self, config: ClientConfig) -> None:
        """Initialize client.

        Args:
            config: Validated client configuration.
        """
        self._config = config

    @classmethod
    def create(
        cls,
        backend: CacheBackend,
        *,
        namespace: str,
        default_ttl: int,
        on_error: OnError | str = OnError.RETURN_EMPTY,
        max_key_length: int = DEFAULT_MAX_KEY_LENGTH,
    ) -> "NamespacedCacheClient":
        """Build a client and its configuration in one call."""
        return cls(
            ClientConfig(
                backend=backend,
                default_ttl=default_ttl,
                namespace=namespace,
                on_error=on_error,
                max_key_length=max_key_length,
            )
        )

    @property
    def config(self) -> ClientConfig:
        """Configuration this client was built with."""
        return self._config

    def physical_key(self, key: str) -> str:
        """Key sent to the backend for a logical key."""
        return normalize_key(self._config.namespace, key, self._config.max_key_length)

    async def get(self, key: str) -> Any | None:
        """Get a value from cache.

        Args:
            key: Logical cache key.

        Returns:
            Cached value, or None on a miss (and on failure when
            configured to return empty).
        """
        physical_key = self.physical_key(key)
        try:
            data = await self._config.backend.get(physical_key)
            if data is None:
                logger.debug(
                    "cache_miss", namespace=self._config.namespace, key=physical_key
                )
                return None
            value = deserialize(data)
        except Exception as e:
            self._handle_failure("get", physical_key, e)
            return None

        logger.debug("cache_hit", namespace=self._config.namespace, key=physical_key)
        return value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Set a value in cache.

        Args:
            key: Logical cache key.
            value: JSON-representable value to cache.
            ttl: TTL in seconds. Falls back to the default TTL unless positive.
        """
        physical_key = self.physical_key(key)
        effective_ttl = ttl if _is_positive_int(ttl) else self._config.default_ttl
        try:
            serialized = serialize(value)
            await self._config.backend.set(physical_key, serialized, ttl=effective_ttl)
        except Exception as e:
            self._handle_failure("set", physical_key, e)
            return

        logger.debug(
            "cache_set",
            namespace=self._config.namespace,
            key=physical_key,
            ttl=effective_ttl,
        )

    async def delete(self, key: str) -> None:
        """Delete a value from cache.

        Args:
            key: Logical cache key.
        """
        physical_key = self.physical_key(key)
        try:
            await self._config.backend.delete(physical_key)
        except Exception as e:
            self._handle_failure("delete", physical_key, e)
            return

        logger.debug("cache_delete", namespace=self._config.namespace, key=physical_key)

    def _handle_failure(self, operation: str, physical_key: str, error: Exception) -> None:
        """Apply the configured error policy to a failed operation.

        Raises:
            Exception: The original error, unchanged, when rejecting.
        """
        rejecting = self._config.on_error is OnError.REJECT
        log = logger.error if rejecting else logger.warning
        log(
            f"cache_{operation}_error",
            namespace=self._config.namespace,
            key=physical_key,
            error=str(error),
            error_type=type(error).__name__,
        )
        if rejecting:
            raise error
