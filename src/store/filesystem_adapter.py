"""Local filesystem storage adapter.

Paths map onto files below a root directory. Used mainly as a backup
target for the IPFS adapter, it implements every operation including
non-recursive mkdir and append.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from core.constants import PATH_SEPARATOR
from core.errors import InvalidPathError
from core.logging_config import get_logger
from core.types import FileContent
from store.content_mapper import read_file_content
from store.path_normalizer import normalize_path

_LOGGER = get_logger(__name__)


class FilesystemStorageAdapter:
    """Storage adapter writing plain files under a root directory."""

    def __init__(self, root: Path, logger: Any | None = None) -> None:
        self._root = root.expanduser().resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        self._logger = logger or _LOGGER
        self._logger.info(
            "storage_service_started",
            adapter=type(self).__name__,
            root=str(self._root),
        )

    @property
    def root(self) -> Path:
        return self._root

    def get(self, path: str) -> str | None:
        """Return the absolute local path of a stored file, if present."""
        local_path = self._resolve(path)
        if not local_path.is_file():
            return None
        return str(local_path)

    def put(self, file: FileContent, path: str) -> None:
        local_path = self._resolve(path)
        local_path.parent.mkdir(parents=True, exist_ok=True)
        local_path.write_bytes(read_file_content(file))

    def mkdir(self, dir: str, recursive: bool = True) -> None:
        """Create a directory below the root.

        Args:
            dir: Directory path.
            recursive: Create missing parents when True; otherwise the
                parent must already exist.
        """
        self._resolve(dir).mkdir(parents=recursive, exist_ok=True)

    def file_exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def append(self, file: FileContent, path: str) -> None:
        local_path = self._resolve(path)
        local_path.parent.mkdir(parents=True, exist_ok=True)
        with local_path.open("ab") as handle:
            handle.write(read_file_content(file))

    def _resolve(self, path: str) -> Path:
        """Map a storage path to a local path inside the root.

        Raises:
            InvalidPathError: If the path escapes the root.
        """
        relative = normalize_path(path).lstrip(PATH_SEPARATOR)
        local_path = (self._root / relative).resolve()
        if local_path != self._root and self._root not in local_path.parents:
            raise InvalidPathError(
                f"Path '{path}' resolves outside storage root {self._root}."
            )
        return local_path
