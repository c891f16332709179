"""Shared typed models.

This module defines the storage interface every adapter satisfies and
the closed set of mutating operations replayed against backup adapters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Protocol, Union

FileContent = Union[bytes, str, os.PathLike]


class StorageInterface(Protocol):
    """Path-addressed operations shared by all storage adapters."""

    def get(self, path: str) -> str | None: ...

    def put(self, file: FileContent, path: str) -> None: ...

    def mkdir(self, dir: str, recursive: bool = True) -> None: ...

    def file_exists(self, path: str) -> bool: ...

    def append(self, file: FileContent, path: str) -> None: ...


@dataclass(frozen=True)
class MkdirOp:
    """Directory creation replayed on a backup adapter.

    Attributes:
        dir: Directory path exactly as the caller passed it.
        recursive: Recursive flag exactly as the caller passed it.
    """

    dir: str
    recursive: bool = True


@dataclass(frozen=True)
class PutOp:
    """File write replayed on a backup adapter."""

    file: FileContent
    path: str


@dataclass(frozen=True)
class AppendOp:
    """File append replayed on a backup adapter."""

    file: FileContent
    path: str


MutatingOperation = Union[MkdirOp, PutOp, AppendOp]


@dataclass(frozen=True)
class MembershipEdge:
    """One directory membership record in the index store.

    Attributes:
        container: Set key the member was added to.
        member: Descendant directory prefix.
    """

    container: str
    member: str
