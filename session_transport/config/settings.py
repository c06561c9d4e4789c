"""
Configuration management for Session Transport.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from session_transport.exceptions import ConfigurationLoadError, InvalidConfigurationError
from session_transport.logging_config import get_logger

logger = get_logger(__name__)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_LOG_FORMATS = ["json", "console"]


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded

    Examples:
        "${STEAM_PROXY}" -> value of STEAM_PROXY env var
        "${USER_AGENT:my-client/1.0}" -> value of USER_AGENT or "my-client/1.0" if not set
    """
    if isinstance(value, str):
        # Pattern matches ${VAR} or ${VAR:default}
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass
class TransportConfig:
    """Transport configuration."""

    user_agent: Optional[str] = None
    http_proxy: Optional[str] = None
    socks_proxy: Optional[str] = None
    local_address: Optional[str] = None
    timeout_seconds: float = 10.0
    follow_redirects: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    format: str = "json"  # "json" or "console"


@dataclass
class SessionTransportConfig:
    """Main Session Transport configuration."""

    transport: TransportConfig = field(default_factory=TransportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.session_transport/config.yaml")


def get_default_config() -> SessionTransportConfig:
    """
    Get default configuration with sensible defaults.

    Returns:
        SessionTransportConfig: Default configuration object
    """
    return SessionTransportConfig(
        transport=TransportConfig(),
        logging=LoggingConfig(),
    )


def load_config(config_path: Optional[str] = None) -> SessionTransportConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        SessionTransportConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(config_path)

    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        )
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}", exc_info=True)
        raise ConfigurationLoadError(
            f"Failed to read configuration file '{config_path}': {e}"
        )

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': top level must be a mapping"
        )

    config_data = _expand_env_vars(config_data)
    logger.debug("Expanded environment variables in configuration")

    try:
        config = _build_config_from_dict(config_data)
        _validate_config(config)
        logger.info(f"Successfully loaded and validated configuration from {config_path}")
        return config
    except (InvalidConfigurationError, TypeError, ValueError, AttributeError) as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        )


def _optional_str(value: Any) -> Optional[str]:
    # Env expansion turns unset variables into "", which means "not configured".
    if value is None or value == "":
        return None
    return str(value)


def _coerce_bool(value: Any) -> Any:
    # Env expansion yields strings; anything unrecognised is left for validation.
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0"):
            return False
    return value


def _build_config_from_dict(config_data: Dict[str, Any]) -> SessionTransportConfig:
    """
    Build SessionTransportConfig from dictionary loaded from YAML.

    Merges user configuration with defaults.

    Args:
        config_data: Dictionary loaded from YAML file

    Returns:
        SessionTransportConfig: Configuration object
    """
    default_config = get_default_config()

    transport_data = config_data.get('transport') or {}
    transport = TransportConfig(
        user_agent=_optional_str(
            transport_data.get('user_agent', default_config.transport.user_agent)
        ),
        http_proxy=_optional_str(
            transport_data.get('http_proxy', default_config.transport.http_proxy)
        ),
        socks_proxy=_optional_str(
            transport_data.get('socks_proxy', default_config.transport.socks_proxy)
        ),
        local_address=_optional_str(
            transport_data.get('local_address', default_config.transport.local_address)
        ),
        timeout_seconds=float(
            transport_data.get('timeout_seconds', default_config.transport.timeout_seconds)
        ),
        follow_redirects=_coerce_bool(transport_data.get(
            'follow_redirects', default_config.transport.follow_redirects
        )),
    )

    logging_data = config_data.get('logging') or {}
    logging = LoggingConfig(
        level=logging_data.get('level', default_config.logging.level),
        file=os.path.expanduser(
            logging_data.get('file', default_config.logging.file)
        ),
        format=logging_data.get('format', default_config.logging.format),
    )

    return SessionTransportConfig(transport=transport, logging=logging)


def _validate_config(config: SessionTransportConfig) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration to validate

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    transport = config.transport

    network_options = [
        name for name in ("http_proxy", "socks_proxy", "local_address")
        if getattr(transport, name)
    ]
    if len(network_options) > 1:
        logger.error(
            "Configuration validation failed: conflicting network options",
            options=network_options,
        )
        raise InvalidConfigurationError(
            f"Only one of http_proxy, socks_proxy, local_address may be set, "
            f"got {network_options}"
        )

    if transport.timeout_seconds <= 0:
        raise InvalidConfigurationError(
            f"timeout_seconds must be positive, got {transport.timeout_seconds}"
        )

    if not isinstance(transport.follow_redirects, bool):
        raise InvalidConfigurationError(
            f"follow_redirects must be a boolean, got {transport.follow_redirects!r}"
        )

    if config.logging.level.upper() not in VALID_LOG_LEVELS:
        raise InvalidConfigurationError(
            f"logging level must be one of {VALID_LOG_LEVELS}, "
            f"got '{config.logging.level}'"
        )

    if config.logging.format not in VALID_LOG_FORMATS:
        raise InvalidConfigurationError(
            f"logging format must be one of {VALID_LOG_FORMATS}, "
            f"got '{config.logging.format}'"
        )
