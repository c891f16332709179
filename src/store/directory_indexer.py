"""Directory tree emulation on a flat set-membership store.

Every directory prefix is a set key whose members are all descendant
prefixes at every depth, not only immediate children. One set read then
lists a whole subtree, at the cost of n(n+1)/2 set writes for a path of
n segments. Deep hierarchies pay for this quadratically on mkdir.

Set keys are relative: the root is "/" and its descendants are "a/",
"a/b/" and so on, with no leading slash. A mkdir of "/a/b/c/" writes
("/", "a/"), ("/", "a/b/"), ("/", "a/b/c/"), ("a/", "a/b/"),
("a/", "a/b/c/") and ("a/b/", "a/b/c/"). Indexes written with
leading-slash keys ("/a/", "/a/b/") are not readable by this layout.
"""

from __future__ import annotations

from typing import Any

from core.constants import PATH_SEPARATOR, ROOT_DIRECTORY_KEY
from core.logging_config import get_logger
from core.types import MembershipEdge
from store.index_store import IndexStore
from store.path_normalizer import normalize_path

_LOGGER = get_logger(__name__)


def directory_prefixes(dir: str) -> list[str]:
    """Return cumulative prefix keys for a directory, root first.

    Args:
        dir: Directory path.

    Returns:
        ``["/", "a/", "a/b/", ...]``; only the root for an empty path.
    """
    stripped = normalize_path(dir).strip(PATH_SEPARATOR)
    prefixes = [ROOT_DIRECTORY_KEY]
    if not stripped:
        return prefixes
    current = ""
    for segment in stripped.split(PATH_SEPARATOR):
        current = f"{current}{segment}{PATH_SEPARATOR}"
        prefixes.append(current)
    return prefixes


def directory_key(dir: str) -> str:
    """Return the set key holding the descendants of a directory."""
    return directory_prefixes(dir)[-1]


def closure_edges(dir: str) -> list[MembershipEdge]:
    """List every ancestor-to-descendant edge for a directory path.

    Args:
        dir: Directory path.

    Returns:
        Edges in write order: for each prefix, one edge from every
        shallower prefix.
    """
    prefixes = directory_prefixes(dir)
    edges = []
    for depth in range(1, len(prefixes)):
        for ancestor in prefixes[:depth]:
            edges.append(MembershipEdge(container=ancestor, member=prefixes[depth]))
    return edges


class DirectoryIndexer:
    """Registers directories and lists them through the index store."""

    def __init__(self, index_store: IndexStore, logger: Any | None = None) -> None:
        self._index_store = index_store
        self._logger = logger or _LOGGER

    def index(self, dir: str) -> list[MembershipEdge]:
        """Write the transitive-closure edges for a directory.

        Writes are sequential with no rollback: if the store fails part
        way, earlier edges stay in place and the store error propagates.

        Args:
            dir: Directory path.

        Returns:
            Edges written.
        """
        edges = closure_edges(dir)
        for edge in edges:
            self._index_store.set_add(edge.container, edge.member)
        self._logger.debug("directory_indexed", dir=dir, edge_count=len(edges))
        return edges

    def members(self, dir: str) -> list[str]:
        """Return every indexed descendant prefix of a directory, sorted."""
        return sorted(self._index_store.set_members(directory_key(dir)))
