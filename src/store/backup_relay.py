"""Best-effort mirroring of mutating operations to a backup adapter.

The relay runs after the primary operation has already completed. It
never retries and never rolls back the primary: a backup failure is
logged and dropped.
"""

from __future__ import annotations

from typing import Any

from core.logging_config import get_logger
from core.types import AppendOp, MkdirOp, MutatingOperation, PutOp, StorageInterface

_LOGGER = get_logger(__name__)


class BackupRelay:
    """Replays operations against an optional backup adapter."""

    def __init__(self, backup: StorageInterface | None = None, logger: Any | None = None) -> None:
        self._backup = backup
        self._logger = logger or _LOGGER

    @property
    def enabled(self) -> bool:
        return self._backup is not None

    def replay(self, operation: MutatingOperation) -> None:
        """Dispatch an operation with its original arguments to the backup.

        Args:
            operation: Completed primary operation.
        """
        if self._backup is None:
            return
        try:
            _dispatch(self._backup, operation)
        except Exception as error:
            self._logger.warning(
                "backup_replay_failed",
                operation=type(operation).__name__,
                backup=type(self._backup).__name__,
                error=str(error),
            )
            return
        self._logger.debug(
            "backup_replayed",
            operation=type(operation).__name__,
            backup=type(self._backup).__name__,
        )


def _dispatch(backup: StorageInterface, operation: MutatingOperation) -> None:
    if isinstance(operation, MkdirOp):
        backup.mkdir(operation.dir, operation.recursive)
    elif isinstance(operation, PutOp):
        backup.put(operation.file, operation.path)
    elif isinstance(operation, AppendOp):
        backup.append(operation.file, operation.path)
    else:
        raise TypeError(f"Unsupported backup operation: {type(operation).__name__}")
