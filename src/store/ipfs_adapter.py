"""IPFS storage adapter.

IPFS content paths are unpredictable and not human-readable, so this
adapter keeps a Redis index next to it: path to hash mappings for files
and transitive-closure membership sets for directories. Mutating calls
are mirrored to an optional backup adapter in case IPFS data is lost.
"""

from __future__ import annotations

from typing import Any

from core.config import StorageConfig
from core.errors import UnsupportedModeError
from core.logging_config import get_logger
from core.types import FileContent, MkdirOp, PutOp, StorageInterface
from store.backup_relay import BackupRelay
from store.content_mapper import ContentMapper
from store.directory_indexer import DirectoryIndexer
from store.index_store import IndexStore, RedisIndexStore
from store.object_store import IpfsObjectStore, ObjectStore

_LOGGER = get_logger(__name__)


class IpfsStorageAdapter:
    """Path-addressed facade over an IPFS object store and a Redis index.

    Backend errors from either store propagate unmodified. Multi-write
    operations (``put``, ``mkdir``) leave partial index state behind if
    a backend fails part way; no repair pass is attempted.
    """

    def __init__(
        self,
        object_store: ObjectStore,
        index_store: IndexStore,
        logger: Any | None = None,
        backup: StorageInterface | None = None,
    ) -> None:
        """Create the adapter from its collaborators.

        Args:
            object_store: Content-addressed store receiving file content.
            index_store: Key-value and set store holding the index.
            logger: Structured logger; the module logger when omitted.
            backup: Optional adapter mirroring every mutating call.
        """
        self._logger = logger or _LOGGER
        self._directories = DirectoryIndexer(index_store, self._logger)
        self._contents = ContentMapper(object_store, index_store, self._logger)
        self._relay = BackupRelay(backup, self._logger)
        self._logger.info("storage_service_started", adapter=type(self).__name__)

    @classmethod
    def from_config(cls, config: StorageConfig, logger: Any | None = None) -> "IpfsStorageAdapter":
        """Build the adapter and its clients from configuration.

        Args:
            config: Validated storage config.
            logger: Optional structured logger.

        Returns:
            Connected adapter, with a backup when ``config.backup`` is set.

        Raises:
            StorageConfigError: If the backup descriptor is invalid.
            StorageDependencyError: If a client library is missing.
        """
        from store.adapter_factory import build_storage_adapter

        backup = None
        if config.backup is not None:
            backup = build_storage_adapter(config.backup, logger)
        return cls(
            object_store=IpfsObjectStore.connect(config.hostname, config.port, config.api_port),
            index_store=RedisIndexStore.connect(config.redis),
            logger=logger,
            backup=backup,
        )

    @property
    def has_backup(self) -> bool:
        return self._relay.enabled

    def get(self, path: str) -> str | None:
        """Return the index value at a path.

        This is the content hash recorded by ``put``, not the file
        content. Use ``read_content`` for the bytes.
        """
        return self._contents.get(path)

    def put(self, file: FileContent, path: str) -> None:
        """Store content in IPFS and index it under a path."""
        self._contents.put(file, path)
        self._relay.replay(PutOp(file=file, path=path))

    def mkdir(self, dir: str, recursive: bool = True) -> None:
        """Register a directory and all of its ancestors.

        Raises:
            UnsupportedModeError: If ``recursive`` is False.
        """
        if not recursive:
            raise UnsupportedModeError(
                f"Non-recursive mkdir is not supported by {type(self).__name__} "
                f"(dir '{dir}'). Call mkdir with recursive=True."
            )
        self._directories.index(dir)
        self._relay.replay(MkdirOp(dir=dir, recursive=recursive))

    def file_exists(self, path: str) -> bool:
        """Return True when a mapping exists for the path.

        The object store itself is not consulted.
        """
        return self._contents.file_exists(path)

    def append(self, file: FileContent, path: str) -> None:
        """Always fails; content-addressed objects cannot be appended in place.

        Raises:
            StorageNotImplementedError: Always, before any write.
        """
        self._contents.append(file, path)

    def list_directory(self, dir: str) -> list[str]:
        """Return every descendant directory prefix below ``dir``."""
        return self._directories.members(dir)

    def lookup_path(self, content_hash: str) -> str | None:
        return self._contents.lookup_path(content_hash)

    def read_content(self, path: str) -> bytes | None:
        return self._contents.read(path)

    def content_url(self, path: str) -> str | None:
        """Return the IPFS gateway URL serving the content mapped at a path."""
        return self._contents.url(path)
