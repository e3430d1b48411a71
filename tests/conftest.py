"""Shared fixtures: in-memory sinks, formats and a legacy sink double."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import pytest

from logtransport import LegacyTransport, PendingWrite, Record
from logtransport.legacy import _ERROR_BRIDGES

# Eight levels, most severe first.
EIGHT_LEVELS = {
    "error": 0,
    "warn": 1,
    "dog": 2,
    "cat": 3,
    "info": 4,
    "verbose": 5,
    "silly": 6,
    "parrot": 7,
}


def records_for(levels: Sequence[str]) -> list[Record]:
    return [Record(level=lv, message=f"Testing message for level: {lv}") for lv in levels]


class Outcomes:
    """Completion callback factory that remembers every outcome."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, BaseException | None]] = []

    def cb(self, tag: str = "done"):
        def done(err: BaseException | None = None) -> None:
            self.calls.append((tag, err))

        return done

    @property
    def tags(self) -> list[str]:
        return [tag for tag, _ in self.calls]


class ListSink:
    """Records every delivered record and completes immediately."""

    def __init__(self) -> None:
        self.records: list[Record] = []

    def log(self, record: Record, done) -> None:
        self.records.append(record)
        done(None)


class HoldingSink:
    """Keeps completions until release() -- an asynchronous sink."""

    def __init__(self) -> None:
        self.held: list[tuple[Record, Any]] = []

    def log(self, record: Record, done) -> None:
        self.held.append((record, done))

    def release(self) -> None:
        held, self.held = self.held, []
        for _, done in held:
            done(None)


class BatchListSink(ListSink):
    """Batch-capable sink; remembers each batch it received."""

    def __init__(self) -> None:
        super().__init__()
        self.batches: list[list[Record]] = []

    def logv(self, writes: Sequence[PendingWrite], done) -> None:
        self.batches.append([w.record for w in writes])
        for w in writes:
            w.done(None)
        done(None)


class UpperFormat:
    """Upper-cases the display level and tags the record."""

    def __init__(self, **options: Any) -> None:
        self.options = options
        self.seen_options: list[Any] = []

    def transform(self, record: Record, options):
        self.seen_options.append(options)
        record.level = record.level.upper()
        record.meta["formatted"] = True
        return record


class DropFormat:
    options: dict = {}

    def transform(self, record: Record, options):
        return None


class ExplodingFormat:
    """Raises for records whose message contains ``boom``."""

    options: dict = {}

    def transform(self, record: Record, options):
        if "boom" in record.message:
            raise RuntimeError(f"cannot format {record.message}")
        return record


class LegacySinkDouble:
    """Older-style sink with an error channel, a close hook and a name."""

    name = "TestLegacy"

    def __init__(self, *, level: str | None = None, handle_exceptions: bool = False) -> None:
        self.level = level
        self.handle_exceptions = handle_exceptions
        self.calls: list[tuple[str, str, Any]] = []
        self.listeners: list[Any] = []
        self.closed = 0

    def log(self, level, message, meta, done) -> None:
        self.calls.append((level, message, meta))
        done()

    def close(self) -> None:
        self.closed += 1

    def add_error_listener(self, listener) -> None:
        self.listeners.append(listener)

    def remove_error_listener(self, listener) -> None:
        self.listeners.remove(listener)

    def fail(self, err: BaseException) -> None:
        for listener in list(self.listeners):
            listener(err)


@pytest.fixture(autouse=True)
def _reset_state():
    """Reset emitter and legacy error bridges around each test."""
    from logtransport.observability.emitter import reset

    root = logging.getLogger()
    root_level = root.level
    reset()
    _ERROR_BRIDGES.clear()
    yield
    reset()
    _ERROR_BRIDGES.clear()
    root.setLevel(root_level)


@pytest.fixture(autouse=True)
def deprecations(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Silence the legacy deprecation notice, remembering who triggered it."""
    seen: list[str] = []
    monkeypatch.setattr(
        LegacyTransport, "_deprecated", lambda self: seen.append(self._sink_name)
    )
    return seen


@pytest.fixture()
def outcomes() -> Outcomes:
    return Outcomes()


@pytest.fixture()
def sink() -> ListSink:
    return ListSink()
