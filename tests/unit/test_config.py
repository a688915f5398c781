"""
Unit tests for codec configuration.

Tests environment variable mapping and validation of CodecSettings.
"""

import pytest
from pydantic import ValidationError

from georecord import CodecSettings, get_settings


class TestCodecSettings:
    """Test CodecSettings environment mapping."""

    def test_defaults(self, settings):
        """Test default values without environment overrides."""
        assert settings.geometry_field == "geometry"
        assert settings.default_dimension == 2
        assert settings.warn_on_duplicate_properties is True

    def test_environment_overrides(self, monkeypatch):
        """Test that GEORECORD_* variables override defaults."""
        monkeypatch.setenv("GEORECORD_GEOMETRY_FIELD", "geom")
        monkeypatch.setenv("GEORECORD_DEFAULT_DIMENSION", "3")
        monkeypatch.setenv("GEORECORD_WARN_ON_DUPLICATE_PROPERTIES", "false")

        settings = CodecSettings(_env_file=None)

        assert settings.geometry_field == "geom"
        assert settings.default_dimension == 3
        assert settings.warn_on_duplicate_properties is False

    def test_invalid_dimension(self, monkeypatch):
        """Test that dimensions other than 2 and 3 are rejected."""
        monkeypatch.setenv("GEORECORD_DEFAULT_DIMENSION", "4")
        with pytest.raises(ValidationError, match="must be 2 or 3"):
            CodecSettings(_env_file=None)

    def test_get_settings_is_cached(self, monkeypatch):
        """Test that get_settings returns one shared instance."""
        monkeypatch.delenv("GEORECORD_GEOMETRY_FIELD", raising=False)
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
