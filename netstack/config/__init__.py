"""
Configuration management for Netstack.

Handles loading and validation of configuration files.
"""

from netstack.config.settings import (
    LoggingConfig,
    MockConfig,
    NetstackConfig,
    TransportConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "LoggingConfig",
    "MockConfig",
    "NetstackConfig",
    "TransportConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
