"""S3 storage adapter.

This module encapsulates boto3 client creation and maps storage paths
onto object keys under a bucket prefix. Directories are zero-byte
``dir/`` marker objects.
"""

from __future__ import annotations

from typing import Any

from core.constants import PATH_SEPARATOR
from core.errors import StorageBackendError, StorageDependencyError
from core.logging_config import get_logger
from core.types import FileContent
from store.content_mapper import read_file_content
from store.directory_indexer import directory_prefixes
from store.path_normalizer import normalize_path

_LOGGER = get_logger(__name__)


def create_s3_client(region: str | None = None, profile: str | None = None) -> Any:
    """Create boto3 S3 client for backups.

    Args:
        region: Optional AWS region.
        profile: Optional AWS profile name.

    Returns:
        Boto3 S3 client.

    Raises:
        StorageDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise StorageDependencyError(
            "S3 backups require boto3, but it is not installed. "
            "Install boto3 to mirror writes to an S3 bucket."
        ) from error
    session_kwargs: dict[str, str] = {}
    if profile:
        session_kwargs["profile_name"] = profile
    if region:
        session_kwargs["region_name"] = region
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


class S3StorageAdapter:
    """Storage adapter writing objects to an S3 bucket."""

    def __init__(
        self,
        client: Any,
        bucket: str,
        prefix: str = "",
        logger: Any | None = None,
    ) -> None:
        self._client = client
        self._bucket = bucket
        self._prefix = prefix.strip(PATH_SEPARATOR)
        self._logger = logger or _LOGGER
        self._logger.info(
            "storage_service_started",
            adapter=type(self).__name__,
            bucket=bucket,
            prefix=self._prefix,
        )

    def object_key(self, path: str) -> str:
        """Return the object key for a storage path."""
        relative = normalize_path(path).lstrip(PATH_SEPARATOR)
        if not self._prefix:
            return relative
        return f"{self._prefix}/{relative}"

    def get(self, path: str) -> str | None:
        """Return the ``s3://`` URI of a stored object, if present."""
        if not self.file_exists(path):
            return None
        return f"s3://{self._bucket}/{self.object_key(path)}"

    def put(self, file: FileContent, path: str) -> None:
        self._put_object(self.object_key(path), read_file_content(file))

    def mkdir(self, dir: str, recursive: bool = True) -> None:
        """Write directory marker objects.

        Args:
            dir: Directory path.
            recursive: Write a marker for every ancestor when True,
                otherwise only for ``dir`` itself.
        """
        prefixes = directory_prefixes(dir)[1:]
        if not recursive:
            prefixes = prefixes[-1:]
        for prefix in prefixes:
            self._put_object(self.object_key(prefix), b"")

    def file_exists(self, path: str) -> bool:
        object_key = self.object_key(path)
        try:
            self._client.head_object(Bucket=self._bucket, Key=object_key)
        except Exception as error:
            if _is_missing_object_error(error):
                return False
            raise StorageBackendError(
                f"Failed to check s3://{self._bucket}/{object_key}: {error}. "
                "Check AWS credentials and retry."
            ) from error
        return True

    def append(self, file: FileContent, path: str) -> None:
        """Read, concatenate and rewrite an object."""
        object_key = self.object_key(path)
        existing = b""
        if self.file_exists(path):
            try:
                response = self._client.get_object(Bucket=self._bucket, Key=object_key)
                existing = response["Body"].read()
            except Exception as error:
                raise StorageBackendError(
                    f"Failed to read s3://{self._bucket}/{object_key}: {error}. "
                    "Check AWS credentials and retry."
                ) from error
        self._put_object(object_key, existing + read_file_content(file))

    def _put_object(self, object_key: str, body: bytes) -> None:
        try:
            self._client.put_object(Bucket=self._bucket, Key=object_key, Body=body)
        except Exception as error:
            raise StorageBackendError(
                f"Failed to write s3://{self._bucket}/{object_key}: {error}. "
                "Check AWS credentials and retry."
            ) from error


def _is_missing_object_error(error: Exception) -> bool:
    response = getattr(error, "response", None)
    if not isinstance(response, dict):
        return False
    code = str(response.get("Error", {}).get("Code", ""))
    return code in ("404", "NoSuchKey", "NotFound")
