"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Netstack settings.

Settings live in a YAML file (``~/.netstack/config.yaml`` by default). Every
key is optional; anything left out keeps its default. String values may
reference the environment as ``${NAME}`` or ``${NAME:fallback}``.

Example::

    transport:
      timeout: ${NETSTACK_TIMEOUT:10}
      raise_for_status: true
      headers:
        User-Agent: netstack
    mocks:
      directory: ~/fixtures/users
    logging:
      level: DEBUG
      json_format: false
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import yaml

from netstack.exceptions import InvalidConfigurationError
from netstack.logging_config import get_logger

logger = get_logger(__name__)

_ENV_REF = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _expand_env_vars(value: Any) -> Any:
    """
    Substitute ``${NAME}`` / ``${NAME:fallback}`` references.

    Walks nested dicts and lists; non-string leaves are returned as-is. An
    unset variable without a fallback becomes the empty string.
    """
    if isinstance(value, str):
        return _ENV_REF.sub(
            lambda m: os.environ.get(m.group("name"), m.group("default") or ""),
            value,
        )
    if isinstance(value, dict):
        return {key: _expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    return value


@dataclass
class TransportConfig:
    """Settings for the default HTTP transport."""

    timeout: float = 30.0
    follow_redirects: bool = True
    raise_for_status: bool = False  # 4xx/5xx become transport errors
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class MockConfig:
    """Where recorded payloads are read from."""

    directory: str = ""  # empty: in-memory source


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: str = ""
    json_format: bool = True


@dataclass
class NetstackConfig:
    """Top-level settings object."""

    transport: TransportConfig = field(default_factory=TransportConfig)
    mocks: MockConfig = field(default_factory=MockConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    return os.path.expanduser(os.path.join("~", ".netstack", "config.yaml"))


def get_default_config() -> NetstackConfig:
    """Settings used when no file is present."""
    return NetstackConfig()


def load_config(config_path: Optional[str] = None) -> NetstackConfig:
    """
    Read, expand and validate a settings file.

    A missing or empty file yields the defaults.

    Args:
        config_path: File to read. Defaults to ``get_default_config_path()``.

    Returns:
        NetstackConfig: Validated settings

    Raises:
        InvalidConfigurationError: If the file cannot be read or parsed, is
            not a mapping, or holds invalid values
    """
    path = os.path.expanduser(config_path or get_default_config_path())

    if not os.path.exists(path):
        logger.info("config_not_found", path=path)
        return get_default_config()

    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error("config_parse_failed", path=path, error=str(e))
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{path}': {e}"
        ) from e
    except OSError as e:
        logger.error("config_read_failed", path=path, error=str(e))
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{path}': {e}"
        ) from e

    if raw is None:
        logger.info("config_empty", path=path)
        return get_default_config()

    if not isinstance(raw, dict):
        raise InvalidConfigurationError(
            f"Configuration file '{path}' must contain a mapping at the top level, "
            f"got {type(raw).__name__}"
        )

    try:
        config = _build_config_from_dict(_expand_env_vars(raw))
        _validate_config(config)
    except InvalidConfigurationError:
        raise
    except Exception as e:
        logger.error("config_invalid", path=path, error=str(e))
        raise InvalidConfigurationError(f"Invalid configuration in '{path}': {e}") from e

    logger.debug("config_loaded", path=path)
    return config


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError(f"'{name}' section must be a mapping")
    return section


def _value(section: Mapping[str, Any], key: str, default: Any) -> Any:
    # An explicit YAML null (``key:`` with no value) keeps the default
    value = section.get(key)
    return default if value is None else value


def _build_config_from_dict(data: Mapping[str, Any]) -> NetstackConfig:
    """Overlay the file's sections onto the defaults."""
    defaults = get_default_config()

    transport = _section(data, "transport")
    mocks = _section(data, "mocks")
    log = _section(data, "logging")

    return NetstackConfig(
        transport=TransportConfig(
            timeout=float(_value(transport, "timeout", defaults.transport.timeout)),
            follow_redirects=_value(transport, "follow_redirects", defaults.transport.follow_redirects),
            raise_for_status=_value(transport, "raise_for_status", defaults.transport.raise_for_status),
            headers={str(k): str(v) for k, v in (transport.get("headers") or {}).items()},
        ),
        mocks=MockConfig(
            directory=os.path.expanduser(str(_value(mocks, "directory", defaults.mocks.directory))),
        ),
        logging=LoggingConfig(
            level=str(_value(log, "level", defaults.logging.level)),
            file=os.path.expanduser(str(_value(log, "file", defaults.logging.file))),
            json_format=_value(log, "json_format", defaults.logging.json_format),
        ),
    )


def _validate_config(config: NetstackConfig) -> None:
    """
    Raises:
        InvalidConfigurationError: On a non-positive timeout or unknown log level
    """
    if config.transport.timeout <= 0:
        raise InvalidConfigurationError(
            f"transport timeout must be positive, got {config.transport.timeout}"
        )
    if config.logging.level.upper() not in _LOG_LEVELS:
        raise InvalidConfigurationError(
            f"logging level must be one of {list(_LOG_LEVELS)}, got '{config.logging.level}'"
        )
