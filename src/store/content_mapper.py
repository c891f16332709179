"""Path to content-hash mapping around object store writes.

A put stores the content, then records the forward mapping
``path -> hash`` and the reverse mapping ``/ipfs/<hash> -> path``.
The three writes are not transactional: a failure after the object
store write leaves unindexed content, and a failure between the two
index writes leaves a forward mapping with no reverse entry.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from core.constants import REVERSE_MAPPING_PREFIX, TEXT_ENCODING
from core.errors import StorageNotImplementedError
from core.logging_config import get_logger
from core.types import FileContent
from store.index_store import IndexStore
from store.object_store import ObjectStore
from store.path_normalizer import normalize_path

_LOGGER = get_logger(__name__)


def read_file_content(file: FileContent) -> bytes:
    """Resolve put/append input into raw bytes.

    Args:
        file: Bytes as-is, text encoded as UTF-8, or a local file path.

    Returns:
        Content bytes.
    """
    if isinstance(file, bytes):
        return file
    if isinstance(file, str):
        return file.encode(TEXT_ENCODING)
    return Path(os.fspath(file)).read_bytes()


def reverse_mapping_key(content_hash: str) -> str:
    """Return the index key tracing a hash back to its path."""
    return f"{REVERSE_MAPPING_PREFIX}{content_hash}"


class ContentMapper:
    """Maintains forward and reverse mappings for stored content."""

    def __init__(
        self,
        object_store: ObjectStore,
        index_store: IndexStore,
        logger: Any | None = None,
    ) -> None:
        self._object_store = object_store
        self._index_store = index_store
        self._logger = logger or _LOGGER

    def put(self, file: FileContent, path: str) -> str:
        """Store content and map it to a path.

        Args:
            file: Content to store.
            path: Destination path.

        Returns:
            Content hash assigned by the object store.
        """
        normalized_path = normalize_path(path)
        content_hash = self._object_store.add(read_file_content(file))
        self._index_store.set(normalized_path, content_hash)
        self._index_store.set(reverse_mapping_key(content_hash), normalized_path)
        self._logger.debug("content_mapped", path=normalized_path, content_hash=content_hash)
        return content_hash

    def get(self, path: str) -> str | None:
        """Return the value indexed at a path.

        For paths written by ``put`` this is the content hash, not the
        file bytes; use ``read`` to resolve the bytes.
        """
        return self._index_store.get(normalize_path(path))

    def file_exists(self, path: str) -> bool:
        return bool(self.get(path))

    def lookup_path(self, content_hash: str) -> str | None:
        return self._index_store.get(reverse_mapping_key(content_hash))

    def read(self, path: str) -> bytes | None:
        """Resolve a path through its mapping to the stored bytes.

        Args:
            path: Mapped path.

        Returns:
            Content bytes, or None when the path has no mapping.
        """
        content_hash = self.get(path)
        if not content_hash:
            return None
        return self._object_store.cat(content_hash)

    def url(self, path: str) -> str | None:
        """Return the gateway URL of the content mapped at a path, if any."""
        content_hash = self.get(path)
        if not content_hash:
            return None
        return self._object_store.gateway_url(content_hash)

    def append(self, file: FileContent, path: str) -> None:
        """Reject appends before touching either store.

        Raises:
            StorageNotImplementedError: Always.
        """
        # TODO: cat old content, add concatenation, remap both keys, then pin.rm the old hash.
        raise StorageNotImplementedError(
            f"append is not implemented for content-addressed storage (path '{path}'). "
            "Write the full content with put instead."
        )
