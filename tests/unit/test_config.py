"""
Unit tests for the frontend configuration.

Tests settings loading including:
- Default values
- Environment variable overrides
- Malformed numeric overrides
"""
import os
import pytest
from dataclasses import FrozenInstanceError
from unittest.mock import patch

from glassquote.config.settings import DASHBOARD_SECTIONS, GlassQuoteConfig


class TestConfigDefaults:
    """Tests for default configuration values."""

    def test_default_base_url(self):
        with patch.dict(os.environ, {}, clear=True):
            cfg = GlassQuoteConfig()

        assert cfg.API_BASE_URL == "http://localhost:4000"

    def test_retries_disabled(self):
        with patch.dict(os.environ, {}, clear=True):
            cfg = GlassQuoteConfig()

        assert cfg.MAX_RETRY_ATTEMPTS == 0

    def test_default_markup(self):
        with patch.dict(os.environ, {}, clear=True):
            cfg = GlassQuoteConfig()

        assert cfg.DEFAULT_MARKUP_PERCENT == "30"

    def test_frozen(self):
        """Test config values cannot be modified at runtime."""
        cfg = GlassQuoteConfig()
        with pytest.raises(FrozenInstanceError):
            cfg.API_BASE_URL = "http://elsewhere"


class TestConfigOverrides:
    """Tests for environment variable overrides."""

    def test_base_url_override_and_root(self):
        with patch.dict(os.environ, {"API_BASE_URL": "https://api.vidrieria.test/"}, clear=True):
            cfg = GlassQuoteConfig()

        assert cfg.API_ROOT == "https://api.vidrieria.test"

    def test_numeric_overrides(self):
        env = {"API_TIMEOUT_SECONDS": "5.5", "MAX_RETRY_ATTEMPTS": "2"}
        with patch.dict(os.environ, env, clear=True):
            cfg = GlassQuoteConfig()

        assert cfg.API_TIMEOUT_SECONDS == 5.5
        assert cfg.MAX_RETRY_ATTEMPTS == 2

    def test_malformed_numbers_fall_back(self):
        env = {"API_TIMEOUT_SECONDS": "soon", "MAX_RETRY_ATTEMPTS": "many"}
        with patch.dict(os.environ, env, clear=True):
            cfg = GlassQuoteConfig()

        assert cfg.API_TIMEOUT_SECONDS == 30.0
        assert cfg.MAX_RETRY_ATTEMPTS == 0


class TestDashboardSections:
    """Tests for the header menu sections."""

    def test_anchors(self):
        assert [anchor for anchor, _ in DASHBOARD_SECTIONS] == [
            "calculator", "glass-types", "quotes-list",
        ]
