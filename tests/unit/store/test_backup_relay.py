"""Unit tests for backup operation replay."""

from __future__ import annotations

import pytest

from core.types import AppendOp, MkdirOp, PutOp
from store.backup_relay import BackupRelay
from tests.store_fakes import FakeLogger, RecordingAdapter


@pytest.mark.parametrize(
    ("operation", "expected_call"),
    [
        (MkdirOp(dir="/a/b", recursive=True), ("mkdir", "/a/b", True)),
        (PutOp(file="x", path="/p"), ("put", "x", "/p")),
        (AppendOp(file=b"y", path="/q"), ("append", b"y", "/q")),
    ],
)
def test_replay_dispatches_identical_call(operation, expected_call) -> None:
    """Each operation should reach the backup with its original arguments."""
    backup = RecordingAdapter()

    BackupRelay(backup, FakeLogger()).replay(operation)

    assert backup.calls == [expected_call]


def test_replay_without_backup_is_noop() -> None:
    """No backup should mean no call and no error."""
    relay = BackupRelay(None, FakeLogger())

    relay.replay(PutOp(file="x", path="/p"))

    assert not relay.enabled


def test_replay_logs_and_drops_backup_failure() -> None:
    """A failing backup should be logged and not raised."""
    backup = RecordingAdapter(fail=True)
    logger = FakeLogger()

    BackupRelay(backup, logger).replay(PutOp(file="x", path="/p"))

    assert logger.names("warning") == ["backup_replay_failed"]
    assert backup.calls == [("put", "x", "/p")]


def test_replay_rejects_unknown_operation_type() -> None:
    """Unknown operation objects should be reported as replay failures."""
    logger = FakeLogger()

    BackupRelay(RecordingAdapter(), logger).replay(object())  # type: ignore[arg-type]

    assert logger.names("warning") == ["backup_replay_failed"]
