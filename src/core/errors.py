"""Path store exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Backend client failures (Redis, IPFS) are not part of this hierarchy:
they propagate to callers unmodified.
"""

from __future__ import annotations


class PathStoreError(Exception):
    """Base exception for all path store failures."""


class StorageConfigError(PathStoreError):
    """Raised for invalid storage configuration."""


class StorageDependencyError(PathStoreError):
    """Raised when a backend client library is missing."""


class InvalidPathError(PathStoreError):
    """Raised when a path falls outside the scope an adapter may access."""


class UnsupportedModeError(PathStoreError):
    """Raised when an operation is requested in a mode the adapter lacks."""


class StorageNotImplementedError(PathStoreError, NotImplementedError):
    """Raised by operations an adapter declares but does not provide."""


class StorageBackendError(PathStoreError):
    """Raised when a backup backend rejects a write or read."""
