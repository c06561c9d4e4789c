"""
Configuration management for Session Transport.

Handles loading and validation of configuration files.
"""

from session_transport.config.settings import (
    LoggingConfig,
    SessionTransportConfig,
    TransportConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "LoggingConfig",
    "SessionTransportConfig",
    "TransportConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
