"""Exception hierarchy for the plugin cache.

Backend and serialization failures are never wrapped: they propagate
unchanged when a client is configured to reject. Only problems detected
while building clients and managers raise these types.

Exception Hierarchy:
    PluginCacheError (base)
    └── CacheConfigError - Invalid client, manager or settings configuration
"""

from typing import Any


class PluginCacheError(Exception):
    """Base exception for all plugin cache errors.

    Attributes:
        message: Human-readable error message.
        details: Additional error details.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class CacheConfigError(PluginCacheError):
    """Configuration is invalid.

    Attributes:
        field: Name of the offending configuration field.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        base = super().to_dict()
        base["field"] = self.field
        return base
