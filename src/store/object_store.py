"""Content-addressed object store protocol and IPFS client.

This module encapsulates ipfshttpclient construction and the three
calls the adapters consume: add, cat and remove.
"""

from __future__ import annotations

from typing import Any, Protocol

from core.errors import StorageDependencyError


class ObjectStore(Protocol):
    """Write-once content store keyed by content hash."""

    def add(self, data: bytes) -> str: ...

    def cat(self, content_hash: str) -> bytes: ...

    def remove(self, content_hash: str) -> None: ...

    def gateway_url(self, content_hash: str) -> str: ...


class IpfsObjectStore:
    """Object store backed by an IPFS HTTP API client.

    Attributes:
        hostname: IPFS daemon host.
        port: Gateway port used for public content URLs.
    """

    def __init__(self, client: Any, hostname: str, port: int) -> None:
        self._client = client
        self.hostname = hostname
        self.port = port

    @classmethod
    def connect(cls, hostname: str, port: int, api_port: int) -> "IpfsObjectStore":
        """Connect to an IPFS daemon.

        Args:
            hostname: Daemon host.
            port: Gateway port.
            api_port: HTTP API port.

        Returns:
            Object store bound to the daemon.

        Raises:
            StorageDependencyError: If ipfshttpclient is missing.
        """
        return cls(create_ipfs_client(hostname, api_port), hostname, port)

    def add(self, data: bytes) -> str:
        return str(self._client.add_bytes(data))

    def cat(self, content_hash: str) -> bytes:
        return bytes(self._client.cat(content_hash))

    def remove(self, content_hash: str) -> None:
        self._client.pin.rm(content_hash)

    def gateway_url(self, content_hash: str) -> str:
        """Return the gateway URL serving a content hash."""
        return f"http://{self.hostname}:{self.port}/ipfs/{content_hash}"


def create_ipfs_client(hostname: str, api_port: int) -> Any:
    """Create an ipfshttpclient client for the daemon API.

    Args:
        hostname: Daemon host.
        api_port: HTTP API port.

    Returns:
        Connected IPFS client.

    Raises:
        StorageDependencyError: If ipfshttpclient is missing.
    """
    try:
        import ipfshttpclient
    except ImportError as error:
        raise StorageDependencyError(
            "The object store requires ipfshttpclient, but it is not installed. "
            "Install ipfshttpclient to use the IPFS storage adapter."
        ) from error
    return ipfshttpclient.connect(f"/dns/{hostname}/tcp/{api_port}/http")
