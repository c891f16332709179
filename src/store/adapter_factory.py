"""Storage adapter construction from descriptors.

A descriptor is a mapping whose ``adapter`` key selects the adapter and
whose remaining keys configure it:

    {"adapter": "filesystem", "root": "/var/backup"}
    {"adapter": "s3", "bucket": "b", "prefix": "p", "region": "us-east-1"}
    {"adapter": "ipfs", "hostname": "...", "redis": "redis://...", ...}
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Mapping

from core.config import StorageConfig
from core.constants import (
    BACKUP_ADAPTER_KEY,
    FILESYSTEM_ADAPTER_NAME,
    IPFS_ADAPTER_NAME,
    S3_ADAPTER_NAME,
)
from core.errors import StorageConfigError
from core.logging_config import get_logger
from core.types import StorageInterface
from store.filesystem_adapter import FilesystemStorageAdapter
from store.s3_adapter import S3StorageAdapter, create_s3_client

_LOGGER = get_logger(__name__)


def supported_adapters() -> tuple[str, ...]:
    return tuple(sorted(_BUILDERS))


def build_storage_adapter(
    descriptor: Mapping[str, Any],
    logger: Any | None = None,
) -> StorageInterface:
    """Create a storage adapter from a descriptor.

    Args:
        descriptor: Mapping with an ``adapter`` name plus its options.
        logger: Optional structured logger passed to adapters that take one.

    Returns:
        Constructed adapter.

    Raises:
        StorageConfigError: If the adapter name or its options are invalid.
    """
    adapter_name = descriptor.get(BACKUP_ADAPTER_KEY)
    builder = _BUILDERS.get(str(adapter_name))
    if builder is None:
        raise StorageConfigError(
            f"Unknown storage adapter {adapter_name!r}. "
            f"Supported adapters: {list(supported_adapters())}."
        )
    options = {key: value for key, value in descriptor.items() if key != BACKUP_ADAPTER_KEY}
    adapter = builder(options, logger)
    (logger or _LOGGER).info("backup_adapter_created", adapter=type(adapter).__name__)
    return adapter


def _build_filesystem(options: Mapping[str, Any], logger: Any | None) -> StorageInterface:
    root = options.get("root")
    if not isinstance(root, str) or not root:
        raise StorageConfigError(
            "Filesystem adapter requires a 'root' directory path."
        )
    return FilesystemStorageAdapter(Path(root), logger)


def _build_s3(options: Mapping[str, Any], logger: Any | None) -> StorageInterface:
    bucket = options.get("bucket")
    if not isinstance(bucket, str) or not bucket:
        raise StorageConfigError("S3 adapter requires a 'bucket' name.")
    client = create_s3_client(
        region=_optional_string(options, "region"),
        profile=_optional_string(options, "profile"),
    )
    return S3StorageAdapter(client, bucket, _optional_string(options, "prefix") or "", logger)


def _build_ipfs(options: Mapping[str, Any], logger: Any | None) -> StorageInterface:
    from store.ipfs_adapter import IpfsStorageAdapter

    return IpfsStorageAdapter.from_config(StorageConfig.from_options(options), logger)


def _optional_string(options: Mapping[str, Any], key: str) -> str | None:
    value = options.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise StorageConfigError(
            f"Invalid '{key}' value: expected string, got {type(value).__name__}."
        )
    return value


_BUILDERS: dict[str, Callable[[Mapping[str, Any], Any], StorageInterface]] = {
    FILESYSTEM_ADAPTER_NAME: _build_filesystem,
    S3_ADAPTER_NAME: _build_s3,
    IPFS_ADAPTER_NAME: _build_ipfs,
}
