"""Unit tests for the S3 storage adapter."""

from __future__ import annotations

import io

import pytest

from core.errors import StorageBackendError
from store.s3_adapter import S3StorageAdapter


class _MissingObject(Exception):
    def __init__(self) -> None:
        super().__init__("Not Found")
        self.response = {"Error": {"Code": "404"}}


class _FakeS3Client:
    def __init__(self, fail_writes: bool = False) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self._fail_writes = fail_writes

    def put_object(self, Bucket: str, Key: str, Body: bytes) -> None:
        if self._fail_writes:
            raise RuntimeError("access denied")
        self.objects[(Bucket, Key)] = Body

    def head_object(self, Bucket: str, Key: str) -> dict[str, object]:
        if (Bucket, Key) not in self.objects:
            raise _MissingObject()
        return {"ContentLength": len(self.objects[(Bucket, Key)])}

    def get_object(self, Bucket: str, Key: str) -> dict[str, object]:
        return {"Body": io.BytesIO(self.objects[(Bucket, Key)])}


def test_put_writes_prefixed_key() -> None:
    """Objects should land under the configured prefix."""
    client = _FakeS3Client()
    adapter = S3StorageAdapter(client, "backups", "/mirror/")

    adapter.put("x", "\\docs\\a.txt")

    assert client.objects == {("backups", "mirror/docs/a.txt"): b"x"}


def test_get_returns_uri_only_for_existing_objects() -> None:
    """Get should return an s3 URI when the object exists."""
    adapter = S3StorageAdapter(_FakeS3Client(), "backups")
    adapter.put(b"x", "/a.txt")

    assert adapter.get("/a.txt") == "s3://backups/a.txt"
    assert adapter.get("/b.txt") is None


def test_mkdir_writes_markers_for_ancestors() -> None:
    """Recursive mkdir should write one marker per level."""
    client = _FakeS3Client()
    adapter = S3StorageAdapter(client, "backups", "p")

    adapter.mkdir("/a/b")

    assert set(client.objects) == {("backups", "p/a/"), ("backups", "p/a/b/")}


def test_mkdir_non_recursive_writes_leaf_only() -> None:
    """Non-recursive mkdir should write only the leaf marker."""
    client = _FakeS3Client()
    adapter = S3StorageAdapter(client, "backups")

    adapter.mkdir("/a/b", recursive=False)

    assert set(client.objects) == {("backups", "a/b/")}


def test_append_concatenates_existing_object() -> None:
    """Append should rewrite the object with new content at the end."""
    client = _FakeS3Client()
    adapter = S3StorageAdapter(client, "backups")
    adapter.put("one", "/log")

    adapter.append("two", "/log")
    adapter.append("new", "/fresh")

    assert client.objects[("backups", "log")] == b"onetwo"
    assert client.objects[("backups", "fresh")] == b"new"


def test_write_failures_are_wrapped() -> None:
    """Client write errors should surface as StorageBackendError."""
    adapter = S3StorageAdapter(_FakeS3Client(fail_writes=True), "backups")

    with pytest.raises(StorageBackendError):
        adapter.put("x", "/a")
