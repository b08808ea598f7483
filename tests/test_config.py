"""
Tests for HAL Navigator Configuration
=====================================

Tests config loading and option building.
"""

import os
import pytest
from unittest.mock import patch

from hal_navigator import HttpxTransport, NavigatorConfig, TransportConfig
from hal_navigator.config import HAL_ACCEPT


class TestNavigatorConfig:
    """Test config loading."""

    def test_defaults(self):
        """Default config has sensible values."""
        config = NavigatorConfig()
        assert config.follow_redirects is True
        assert config.transport.timeout == 30.0
        assert config.transport.verify is True
        assert config.transport.headers == {"Accept": HAL_ACCEPT}
        assert config.log_level == "INFO"
        assert config.log_format == "text"

    def test_from_env(self):
        """Config loads from environment variables."""
        env = {
            "HAL_NAVIGATOR_FOLLOW_REDIRECTS": "false",
            "HAL_NAVIGATOR_TIMEOUT": "5",
            "HAL_NAVIGATOR_VERIFY_TLS": "no",
            "HAL_NAVIGATOR_ACCEPT": "application/json",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
        }
        with patch.dict(os.environ, env, clear=False):
            config = NavigatorConfig.from_env()
            assert config.follow_redirects is False
            assert config.transport.timeout == 5.0
            assert config.transport.verify is False
            assert config.transport.headers == {"Accept": "application/json"}
            assert config.log_level == "DEBUG"
            assert config.log_format == "json"

    def test_from_env_custom_prefix(self):
        with patch.dict(os.environ, {"MYAPI_FOLLOW_REDIRECTS": "0"}, clear=False):
            assert NavigatorConfig.from_env(prefix="MYAPI").follow_redirects is False

    def test_from_env_defaults(self):
        keys = [k for k in os.environ if k.startswith("HAL_NAVIGATOR_")]
        with patch.dict(os.environ, {}, clear=False):
            for key in keys:
                del os.environ[key]
            config = NavigatorConfig.from_env()
            assert config.follow_redirects is True
            assert config.transport.timeout == 30.0


class TestToOptions:
    """Test building navigator options from config."""

    def test_options_use_configured_transport(self):
        config = NavigatorConfig(follow_redirects=False, transport=TransportConfig(timeout=2.0))
        options = config.to_options()

        assert options.follow_redirects is False
        transport = options.get.__self__
        assert isinstance(transport, HttpxTransport)
        assert transport.config.timeout == 2.0
        assert options.post.__self__ is transport

    def test_options_overrides(self):
        options = NavigatorConfig().to_options(http={"headers": {"x": "1"}})
        assert options.http == {"headers": {"x": "1"}}

    def test_unknown_override(self):
        with pytest.raises(TypeError):
            NavigatorConfig().to_options(retries=3)
