"""Tests for application configuration."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.config import Settings, get_settings


class TestSettingsDefaults:
    """Tests for default configuration values."""

    def test_default_max_domain_size_is_unbounded(self):
        """Default domain ceiling should be None."""
        settings = Settings(_env_file=None)
        assert settings.max_domain_size is None

    def test_default_random_seed(self):
        """Rolls are unseeded by default."""
        settings = Settings(_env_file=None)
        assert settings.random_seed is None

    def test_default_roll_count(self):
        """One roll unless asked otherwise."""
        settings = Settings(_env_file=None)
        assert settings.default_roll_count == 1

    def test_default_display(self):
        """Six float digits and a 40 character histogram."""
        settings = Settings(_env_file=None)
        assert settings.display_precision == 6
        assert settings.histogram_width == 40

    def test_default_debug_is_false(self):
        """Debug mode should be off by default."""
        settings = Settings(_env_file=None)
        assert settings.debug is False


class TestSettingsFromEnvironment:
    """Tests for environment variable overrides."""

    def test_max_domain_size(self):
        """MAX_DOMAIN_SIZE sets the ceiling."""
        with patch.dict(os.environ, {"MAX_DOMAIN_SIZE": "100"}, clear=False):
            settings = Settings(_env_file=None)
            assert settings.max_domain_size == 100

    def test_case_insensitive(self):
        """Lowercase variable names also work."""
        with patch.dict(os.environ, {"histogram_width": "12"}, clear=False):
            settings = Settings(_env_file=None)
            assert settings.histogram_width == 12

    def test_invalid_domain_size_rejected(self):
        """A ceiling below 1 is invalid."""
        with patch.dict(os.environ, {"MAX_DOMAIN_SIZE": "0"}, clear=False):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_negative_precision_rejected(self):
        """Precision cannot be negative."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, display_precision=-1)


class TestRandomSource:
    """Tests for Settings.random_source."""

    def test_seeded_sources_repeat(self):
        """Two sources from the same seed produce the same draws."""
        settings = Settings(_env_file=None, random_seed=11)
        first = settings.random_source()
        second = settings.random_source()
        assert [first.random() for _ in range(5)] == [second.random() for _ in range(5)]

    def test_sources_are_independent(self):
        """Each call returns a new generator."""
        settings = Settings(_env_file=None, random_seed=11)
        assert settings.random_source() is not settings.random_source()


class TestGetSettings:
    """Tests for get_settings caching."""

    def test_get_settings_returns_settings(self):
        """get_settings should return a Settings instance."""
        assert isinstance(get_settings(), Settings)

    def test_get_settings_is_cached(self):
        """get_settings should return the same instance."""
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_environment(self):
        """Clearing the cache picks up new environment values."""
        with patch.dict(os.environ, {"DISPLAY_PRECISION": "3"}, clear=False):
            get_settings.cache_clear()
            assert get_settings().display_precision == 3
