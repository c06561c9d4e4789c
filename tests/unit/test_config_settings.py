"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Session Transport, a product of Garudex Labs

Unit tests for configuration management.

Tests configuration loading, environment expansion and validation.
"""

import pytest
import yaml

from session_transport.config.settings import (
    LoggingConfig,
    SessionTransportConfig,
    TransportConfig,
    _expand_env_vars,
    _validate_config,
    get_default_config,
    load_config,
)
from session_transport.exceptions import InvalidConfigurationError


class TestConfigurationDataclasses:
    """Test configuration dataclass structures."""

    def test_transport_config_defaults(self):
        config = TransportConfig()
        assert config.user_agent is None
        assert config.http_proxy is None
        assert config.socks_proxy is None
        assert config.local_address is None
        assert config.timeout_seconds == 10.0
        assert config.follow_redirects is True

    def test_logging_config_defaults(self):
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.file == ""
        assert config.format == "json"

    def test_default_config(self):
        config = get_default_config()
        assert isinstance(config, SessionTransportConfig)
        assert config.transport == TransportConfig()


class TestLoadConfig:
    """Test loading configuration from YAML files."""

    def test_missing_file_returns_defaults(self, temp_dir):
        config = load_config(str(temp_dir / "missing.yaml"))
        assert config == get_default_config()

    def test_empty_file_returns_defaults(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == get_default_config()

    def test_loads_transport_section(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text(yaml.safe_dump({
            "transport": {
                "user_agent": "my-client/1.0",
                "http_proxy": "http://proxy.local:3128",
                "timeout_seconds": 5,
                "follow_redirects": False,
            },
            "logging": {"level": "DEBUG", "format": "console"},
        }))

        config = load_config(str(path))
        assert config.transport.user_agent == "my-client/1.0"
        assert config.transport.http_proxy == "http://proxy.local:3128"
        assert config.transport.timeout_seconds == 5.0
        assert config.transport.follow_redirects is False
        assert config.logging.level == "DEBUG"
        assert config.logging.format == "console"

    def test_env_vars_expanded(self, temp_dir, monkeypatch):
        monkeypatch.setenv("TEST_SESSION_UA", "env-agent/2.0")
        monkeypatch.delenv("TEST_SESSION_PROXY", raising=False)
        path = temp_dir / "config.yaml"
        path.write_text(
            "transport:\n"
            "  user_agent: ${TEST_SESSION_UA}\n"
            "  socks_proxy: ${TEST_SESSION_PROXY}\n"
            "  local_address: ${TEST_SESSION_ADDR:10.0.0.2}\n"
        )

        config = load_config(str(path))
        assert config.transport.user_agent == "env-agent/2.0"
        assert config.transport.socks_proxy is None
        assert config.transport.local_address == "10.0.0.2"

    @pytest.mark.parametrize("env_value,expected", [
        ("true", True),
        ("False", False),
        ("no", False),
    ])
    def test_follow_redirects_from_env(self, temp_dir, monkeypatch, env_value, expected):
        monkeypatch.setenv("TEST_SESSION_FOLLOW", env_value)
        path = temp_dir / "config.yaml"
        path.write_text("transport:\n  follow_redirects: ${TEST_SESSION_FOLLOW}\n")

        assert load_config(str(path)).transport.follow_redirects is expected

    def test_follow_redirects_env_default(self, temp_dir, monkeypatch):
        monkeypatch.delenv("TEST_SESSION_FOLLOW", raising=False)
        path = temp_dir / "config.yaml"
        path.write_text("transport:\n  follow_redirects: ${TEST_SESSION_FOLLOW:false}\n")

        assert load_config(str(path)).transport.follow_redirects is False

    def test_unrecognised_follow_redirects_raises(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text(yaml.safe_dump({"transport": {"follow_redirects": "sometimes"}}))
        with pytest.raises(InvalidConfigurationError, match="follow_redirects"):
            load_config(str(path))

    def test_malformed_yaml_raises(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("transport: [unclosed")
        with pytest.raises(InvalidConfigurationError, match="parse YAML"):
            load_config(str(path))

    def test_non_mapping_top_level_raises(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(InvalidConfigurationError):
            load_config(str(path))

    def test_conflicting_network_options_raise(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text(yaml.safe_dump({
            "transport": {"http_proxy": "http://a:1", "local_address": "10.0.0.1"},
        }))
        with pytest.raises(InvalidConfigurationError, match="Only one"):
            load_config(str(path))

    def test_non_numeric_timeout_raises(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text(yaml.safe_dump({"transport": {"timeout_seconds": "soon"}}))
        with pytest.raises(InvalidConfigurationError):
            load_config(str(path))


class TestValidateConfig:
    """Test configuration validation."""

    def test_valid_default(self):
        _validate_config(get_default_config())

    def test_invalid_log_level(self):
        config = SessionTransportConfig(logging=LoggingConfig(level="VERBOSE"))
        with pytest.raises(InvalidConfigurationError, match="logging level"):
            _validate_config(config)

    def test_invalid_log_format(self):
        config = SessionTransportConfig(logging=LoggingConfig(format="xml"))
        with pytest.raises(InvalidConfigurationError, match="logging format"):
            _validate_config(config)

    def test_negative_timeout(self):
        config = SessionTransportConfig(transport=TransportConfig(timeout_seconds=-1))
        with pytest.raises(InvalidConfigurationError, match="timeout_seconds"):
            _validate_config(config)


class TestExpandEnvVars:
    def test_nested_structures(self, monkeypatch):
        monkeypatch.setenv("TEST_EXPAND", "x")
        assert _expand_env_vars({"a": ["${TEST_EXPAND}", 1], "b": "pre-${TEST_EXPAND}"}) == {
            "a": ["x", 1],
            "b": "pre-x",
        }

    def test_default_value(self, monkeypatch):
        monkeypatch.delenv("TEST_UNSET_VAR", raising=False)
        assert _expand_env_vars("${TEST_UNSET_VAR:fallback}") == "fallback"
