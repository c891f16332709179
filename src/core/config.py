"""Runtime configuration model for the path store.

This module owns option parsing and validation for the IPFS adapter.
Other modules consume a typed config object instead of raw option maps.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Union, cast

from core.constants import (
    DEFAULT_IPFS_API_PORT,
    DEFAULT_IPFS_GATEWAY_PORT,
    DEFAULT_IPFS_HOSTNAME,
    DEFAULT_REDIS_URL,
    ENV_PREFIX,
)
from core.errors import StorageConfigError, StorageDependencyError

RedisDescriptor = Union[str, Mapping[str, Any]]

_KNOWN_OPTION_KEYS = ("hostname", "port", "api_port", "redis", "backup")


@dataclass(frozen=True)
class StorageConfig:
    """Validated IPFS adapter configuration.

    Attributes:
        hostname: IPFS daemon host.
        port: IPFS gateway port.
        api_port: IPFS HTTP API port.
        redis: Redis URL or mapping of ``redis.Redis`` keyword arguments.
        backup: Optional backup adapter descriptor.
    """

    hostname: str = DEFAULT_IPFS_HOSTNAME
    port: int = DEFAULT_IPFS_GATEWAY_PORT
    api_port: int = DEFAULT_IPFS_API_PORT
    redis: RedisDescriptor = DEFAULT_REDIS_URL
    backup: Mapping[str, Any] | None = None

    @classmethod
    def from_options(cls, options: Mapping[str, object]) -> "StorageConfig":
        """Build config from an option mapping.

        Args:
            options: Mapping with ``hostname``, ``port``, ``api_port``,
                ``redis`` and optional ``backup`` keys.

        Returns:
            A validated config object.

        Raises:
            StorageConfigError: If option values are invalid.
        """
        unknown_keys = sorted(set(options) - set(_KNOWN_OPTION_KEYS))
        if unknown_keys:
            raise StorageConfigError(
                f"Unknown storage options {unknown_keys}. "
                f"Supported options are {list(_KNOWN_OPTION_KEYS)}."
            )
        return cls(
            hostname=_parse_hostname(options.get("hostname", DEFAULT_IPFS_HOSTNAME)),
            port=_parse_port(options.get("port", DEFAULT_IPFS_GATEWAY_PORT), "port"),
            api_port=_parse_port(options.get("api_port", DEFAULT_IPFS_API_PORT), "api_port"),
            redis=_parse_redis(options.get("redis", DEFAULT_REDIS_URL)),
            backup=_parse_backup(options.get("backup")),
        )

    @classmethod
    def from_json(cls, raw_options: str) -> "StorageConfig":
        """Build config from a JSON option string.

        Args:
            raw_options: JSON object text.

        Returns:
            A validated config object.

        Raises:
            StorageConfigError: If the text is not a JSON object.
        """
        try:
            payload = json.loads(raw_options)
        except json.JSONDecodeError as error:
            raise StorageConfigError(
                f"Storage options are not valid JSON: {error}. Provide a JSON object."
            ) from error
        return cls.from_options(_expect_mapping(payload, "storage options"))

    @classmethod
    def from_env(cls) -> "StorageConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            StorageConfigError: If environment values are invalid.
        """
        options: dict[str, object] = {
            "hostname": os.getenv(f"{ENV_PREFIX}IPFS_HOSTNAME", DEFAULT_IPFS_HOSTNAME),
            "port": os.getenv(f"{ENV_PREFIX}IPFS_PORT", str(DEFAULT_IPFS_GATEWAY_PORT)),
            "api_port": os.getenv(f"{ENV_PREFIX}IPFS_API_PORT", str(DEFAULT_IPFS_API_PORT)),
            "redis": os.getenv(f"{ENV_PREFIX}REDIS_URL", DEFAULT_REDIS_URL),
        }
        backup_path = os.getenv(f"{ENV_PREFIX}BACKUP_CONFIG")
        if backup_path:
            options["backup"] = _load_yaml_payload(backup_path)
        return cls.from_options(options)


def load_storage_config(config_path: str) -> StorageConfig:
    """Load and validate a YAML or JSON storage config file.

    Args:
        config_path: File path to the config document.

    Returns:
        Validated storage config.

    Raises:
        StorageDependencyError: If PyYAML is unavailable.
        StorageConfigError: If the file is missing or malformed.
    """
    payload = _load_yaml_payload(config_path)
    return StorageConfig.from_options(_expect_mapping(payload, "storage config"))


def _load_yaml_payload(config_path: str) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise StorageDependencyError(
            "Storage config files require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    config_file = Path(config_path).expanduser().resolve()
    if not config_file.exists():
        raise StorageConfigError(
            f"Storage config file does not exist at {config_file}. Provide a valid file path."
        )
    try:
        payload = cast(object, yaml.safe_load(config_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise StorageConfigError(
            f"Failed to read storage config at {config_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise StorageConfigError(
            f"Failed to parse storage config at {config_file}: {error}. Fix the syntax and retry."
        ) from error
    if payload is None:
        raise StorageConfigError(f"Storage config at {config_file} is empty.")
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise StorageConfigError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise StorageConfigError(
        f"Invalid {context}: expected a mapping, got {type(value).__name__}."
    )


def _parse_hostname(raw_value: object) -> str:
    if not isinstance(raw_value, str) or not raw_value.strip():
        raise StorageConfigError(
            f"Invalid hostname value {raw_value!r}: expected a non-empty string."
        )
    return raw_value.strip()


def _parse_port(raw_value: object, option_name: str) -> int:
    """Parse a TCP port option.

    Args:
        raw_value: Raw option value, int or numeric string.
        option_name: Option name used in error messages.

    Returns:
        Parsed port number.

    Raises:
        StorageConfigError: If value is not an integer in 1..65535.
    """
    if isinstance(raw_value, bool):
        raise StorageConfigError(f"Invalid {option_name} value: expected integer, got bool.")
    try:
        port = int(cast(Any, raw_value))
    except (TypeError, ValueError) as error:
        raise StorageConfigError(
            f"Invalid {option_name} value: expected integer, got '{raw_value}'. "
            f"Set {option_name} to a numeric port."
        ) from error
    if not 0 < port < 65536:
        raise StorageConfigError(
            f"Invalid {option_name} value {port}: expected a port between 1 and 65535."
        )
    return port


def _parse_redis(raw_value: object) -> RedisDescriptor:
    if isinstance(raw_value, str) and raw_value.strip():
        return raw_value.strip()
    if isinstance(raw_value, Mapping):
        return dict(_expect_mapping(raw_value, "redis options"))
    raise StorageConfigError(
        f"Invalid redis value {raw_value!r}: expected a URL string or a mapping "
        "of connection keyword arguments."
    )


def _parse_backup(raw_value: object) -> Mapping[str, Any] | None:
    if raw_value is None:
        return None
    return dict(_expect_mapping(raw_value, "backup options"))
