"""Key-value index store protocol and Redis client.

The index holds path to hash mappings as scalar keys and directory
membership as unordered sets.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from core.config import RedisDescriptor
from core.errors import StorageDependencyError


class IndexStore(Protocol):
    """Scalar get/set plus set membership."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def set_add(self, set_key: str, member: str) -> None: ...

    def set_members(self, set_key: str) -> set[str]: ...


class RedisIndexStore:
    """Index store backed by a Redis client.

    Connection errors raised by the client are not translated.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def connect(cls, descriptor: RedisDescriptor) -> "RedisIndexStore":
        """Create an index store from a Redis connection descriptor.

        Args:
            descriptor: Redis URL or mapping of ``redis.Redis`` keyword arguments.

        Returns:
            Index store wrapping a response-decoding Redis client.

        Raises:
            StorageDependencyError: If redis is missing.
        """
        return cls(create_redis_client(descriptor))

    def get(self, key: str) -> str | None:
        return self._client.get(key)

    def set(self, key: str, value: str) -> None:
        self._client.set(key, value)

    def set_add(self, set_key: str, member: str) -> None:
        self._client.sadd(set_key, member)

    def set_members(self, set_key: str) -> set[str]:
        return set(self._client.smembers(set_key))


def create_redis_client(descriptor: RedisDescriptor) -> Any:
    """Create a redis-py client that returns ``str`` values.

    Args:
        descriptor: Redis URL or mapping of connection keyword arguments.

    Returns:
        Redis client.

    Raises:
        StorageDependencyError: If redis is missing.
    """
    try:
        import redis
    except ImportError as error:
        raise StorageDependencyError(
            "The index store requires redis, but it is not installed. "
            "Install redis to use the IPFS storage adapter."
        ) from error
    if isinstance(descriptor, Mapping):
        connection_kwargs = dict(descriptor)
        connection_kwargs["decode_responses"] = True
        return redis.Redis(**connection_kwargs)
    return redis.Redis.from_url(descriptor, decode_responses=True)
