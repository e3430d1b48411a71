"""Capability protocols a transport consumes, plus the small value types
passed across them.

Sinks, formats and producers are supplied from outside. The transport
resolves what it needs from them once, at construction or attach time.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from logtransport.levels import SeverityTable
from logtransport.record import Record


def noop(err: BaseException | None = None) -> None:
    """Completion callback that ignores its outcome."""


@dataclass(frozen=True)
class PendingWrite:
    """A record waiting in a batch, with its own completion callback."""

    record: Record
    done: Done = noop


Done = Callable[[BaseException | None], None]
LogFn = Callable[[Record, Done], Any]
BatchLogFn = Callable[[Sequence[PendingWrite], Done], Any]
CloseFn = Callable[[], Any]


@dataclass(frozen=True)
class SinkBinding:
    """Sink capabilities resolved once when a transport is built."""

    log: LogFn
    logv: BatchLogFn | None = None
    close: CloseFn | None = None


@runtime_checkable
class Sink(Protocol):
    """Performs the actual write of one record."""

    def log(self, record: Record, done: Done) -> Any: ...


@runtime_checkable
class BatchSink(Protocol):
    """Writes several accepted records in one call."""

    def logv(self, writes: Sequence[PendingWrite], done: Done) -> Any: ...


@runtime_checkable
class FormatStage(Protocol):
    """Pure transform applied to a copy of each accepted record.

    A falsy result means the format filtered the record out.
    """

    options: Mapping[str, Any]

    def transform(self, record: Record, options: Mapping[str, Any]) -> Record | None: ...


@runtime_checkable
class Parent(Protocol):
    """What a transport reads from the producer it is attached to."""

    levels: SeverityTable
    level: str | None


@runtime_checkable
class LegacySink(Protocol):
    """Older sink shape taking level, message and meta as separate arguments."""

    def log(self, level: str, message: str, meta: Any, done: Done) -> Any: ...


@runtime_checkable
class ErrorChannel(Protocol):
    """A sink that reports its own asynchronous failures to listeners."""

    def add_error_listener(self, listener: Callable[[BaseException], None]) -> None: ...

    def remove_error_listener(self, listener: Callable[[BaseException], None]) -> None: ...
