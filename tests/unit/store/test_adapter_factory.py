"""Unit tests for storage adapter construction."""

from __future__ import annotations

import pytest

from core.errors import StorageConfigError
from store.adapter_factory import build_storage_adapter, supported_adapters
from store.filesystem_adapter import FilesystemStorageAdapter
from store.s3_adapter import S3StorageAdapter


def test_supported_adapters_lists_builders() -> None:
    """All adapter names should be advertised."""
    assert supported_adapters() == ("filesystem", "ipfs", "s3")


def test_build_filesystem_adapter(tmp_path) -> None:
    """A filesystem descriptor should build a rooted adapter."""
    adapter = build_storage_adapter({"adapter": "filesystem", "root": str(tmp_path)})

    assert isinstance(adapter, FilesystemStorageAdapter)
    assert adapter.root == tmp_path.resolve()


def test_build_s3_adapter_uses_session_settings(monkeypatch) -> None:
    """S3 descriptors should pass region and profile to client creation."""
    captured: dict[str, object] = {}

    def _fake_client(region=None, profile=None):
        captured.update(region=region, profile=profile)
        return object()

    monkeypatch.setattr("store.adapter_factory.create_s3_client", _fake_client)

    adapter = build_storage_adapter(
        {"adapter": "s3", "bucket": "b", "prefix": "p", "region": "eu-west-1"}
    )

    assert isinstance(adapter, S3StorageAdapter)
    assert captured == {"region": "eu-west-1", "profile": None}


@pytest.mark.parametrize(
    "descriptor",
    [
        {},
        {"adapter": "ftp"},
        {"adapter": "filesystem"},
        {"adapter": "s3"},
        {"adapter": "s3", "bucket": "b", "region": 5},
    ],
)
def test_invalid_descriptors_raise(descriptor) -> None:
    """Unknown adapters and missing options should be config errors."""
    with pytest.raises(StorageConfigError):
        build_storage_adapter(descriptor)
