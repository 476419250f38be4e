"""Tests for the plugin cache exception hierarchy."""

from plugin_cache.errors import CacheConfigError, PluginCacheError


class TestPluginCacheError:
    """Tests for PluginCacheError."""

    def test_message(self) -> None:
        """Test message is kept on the exception."""
        error = PluginCacheError("broken")
        assert str(error) == "broken"
        assert error.message == "broken"
        assert error.details == {}

    def test_to_dict(self) -> None:
        """Test conversion to dictionary."""
        error = PluginCacheError("broken", details={"store": "redis"})
        assert error.to_dict() == {
            "error_type": "PluginCacheError",
            "message": "broken",
            "details": {"store": "redis"},
        }


class TestCacheConfigError:
    """Tests for CacheConfigError."""

    def test_is_plugin_cache_error(self) -> None:
        """Test inheritance."""
        assert issubclass(CacheConfigError, PluginCacheError)

    def test_to_dict_includes_field(self) -> None:
        """Test field is included in dictionary."""
        error = CacheConfigError("bad ttl", field="default_ttl")
        result = error.to_dict()
        assert result["error_type"] == "CacheConfigError"
        assert result["field"] == "default_ttl"
