"""Core constants used across path store modules.

This module centralizes defaults and key layout values.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_IPFS_HOSTNAME = "localhost"
DEFAULT_IPFS_GATEWAY_PORT = 8080
DEFAULT_IPFS_API_PORT = 5001
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
ROOT_DIRECTORY_KEY = "/"
PATH_SEPARATOR = "/"
REVERSE_MAPPING_PREFIX = "/ipfs/"
BACKUP_ADAPTER_KEY = "adapter"
FILESYSTEM_ADAPTER_NAME = "filesystem"
S3_ADAPTER_NAME = "s3"
IPFS_ADAPTER_NAME = "ipfs"
TEXT_ENCODING = "utf-8"
ENV_PREFIX = "PATHSTORE_"
