"""Unit tests for the local filesystem storage adapter."""

from __future__ import annotations

import pytest

from core.errors import InvalidPathError
from store.filesystem_adapter import FilesystemStorageAdapter


def test_put_and_get_return_local_path(tmp_path) -> None:
    """Get should return the absolute path of a written file."""
    adapter = FilesystemStorageAdapter(tmp_path)

    adapter.put(b"data", "/docs/a.txt")

    assert adapter.get("/docs/a.txt") == str(tmp_path.resolve() / "docs" / "a.txt")
    assert adapter.get("/docs/missing.txt") is None


def test_append_extends_existing_file(tmp_path) -> None:
    """Append should add content after what is already stored."""
    adapter = FilesystemStorageAdapter(tmp_path)
    adapter.put("hello ", "notes.txt")

    adapter.append("world", "notes.txt")

    assert (tmp_path / "notes.txt").read_text() == "hello world"


def test_mkdir_recursive_creates_parents(tmp_path) -> None:
    """Recursive mkdir should create every missing level."""
    adapter = FilesystemStorageAdapter(tmp_path)

    adapter.mkdir("a\\b\\c")

    assert (tmp_path / "a" / "b" / "c").is_dir()


def test_mkdir_non_recursive_requires_parent(tmp_path) -> None:
    """Non-recursive mkdir should fail when the parent is missing."""
    adapter = FilesystemStorageAdapter(tmp_path)

    with pytest.raises(FileNotFoundError):
        adapter.mkdir("/x/y", recursive=False)

    assert not (tmp_path / "x").exists()


def test_file_exists_ignores_directories(tmp_path) -> None:
    """Only regular files should count as existing."""
    adapter = FilesystemStorageAdapter(tmp_path)
    adapter.mkdir("/dir")
    adapter.put("x", "/dir/file")

    assert adapter.file_exists("/dir/file")
    assert not adapter.file_exists("/dir")


def test_paths_outside_root_are_rejected(tmp_path) -> None:
    """Paths escaping the root should raise InvalidPathError."""
    adapter = FilesystemStorageAdapter(tmp_path / "root")

    with pytest.raises(InvalidPathError):
        adapter.put("x", "../escape.txt")

    assert not (tmp_path / "escape.txt").exists()
