"""Transport: severity filtering, formatting and dispatch to a sink.

A transport sits between a producer and a sink. The producer attaches it
(handing over its severity table and default level), then feeds it records
one at a time or in batches. Every record completes exactly once: dropped
records complete immediately, delivered records complete when the sink says
so. Producers use that signal for backpressure.

Format faults never stall the producer: the record is completed first and
the fault is reported afterwards, to error listeners if any are registered,
otherwise by raising it to the caller.
"""

from __future__ import annotations

import weakref
from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from typing import Any

from logtransport.base import (
    BatchLogFn,
    CloseFn,
    Done,
    FormatStage,
    LogFn,
    Parent,
    PendingWrite,
    SinkBinding,
    noop,
)
from logtransport.errors import FormatError, InvalidTransportError, SinkError, TransportError
from logtransport.levels import SeverityTable, priority
from logtransport.observability.emitter import emit
from logtransport.observability.events import (
    BatchDispatched,
    StaleDetachIgnored,
    TransportAttached,
    TransportDetached,
    TransportFaulted,
)
from logtransport.record import Record

ErrorListener = Callable[[TransportError], None]


class BindingState(Enum):
    DETACHED = "detached"
    ATTACHED = "attached"


def _label(obj: Any) -> str:
    return getattr(obj, "name", None) or type(obj).__name__


class Transport:
    """Base transport.

    ``log(record, done)`` is the one required capability: override it in a
    subclass or pass ``log=``. Construction fails with
    ``InvalidTransportError`` when neither is given. A subclass may also
    define ``logv(writes, done)`` to receive batches in one call, and
    ``close()`` to release resources when detached.
    """

    logv: BatchLogFn | None = None
    close: CloseFn | None = None

    def __init__(
        self,
        *,
        level: str | None = None,
        levels: SeverityTable | None = None,
        format: FormatStage | None = None,
        handle_exceptions: bool = False,
        silent: bool = False,
        log: LogFn | None = None,
        logv: BatchLogFn | None = None,
        close: CloseFn | None = None,
        name: str | None = None,
    ) -> None:
        self.level = level
        self.levels = levels
        self.format = format
        self.handle_exceptions = handle_exceptions
        self.silent = silent
        self.name = name or type(self).__name__

        if log is not None:
            self.log = log  # type: ignore[method-assign]
        elif type(self).log is Transport.log:
            raise InvalidTransportError(
                f"{type(self).__name__} must implement log() or be given log="
            )
        if logv is not None:
            self.logv = logv
        if close is not None:
            self.close = close

        self._sink = SinkBinding(log=self.log, logv=self.logv, close=self.close)
        self._format_options: Mapping[str, Any] = getattr(format, "options", None) or {}
        self._explicit_level = level is not None
        self._parent_ref: weakref.ReferenceType[Parent] | None = None
        self._error_listeners: list[ErrorListener] = []

    def log(self, record: Record, done: Done) -> Any:
        """Write one accepted record and call ``done`` when the sink is finished."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    @property
    def parent(self) -> Parent | None:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def state(self) -> BindingState:
        if self.parent is None:
            return BindingState.DETACHED
        return BindingState.ATTACHED

    def attach(self, producer: Parent) -> None:
        """Bind to ``producer``: adopt its severity table and, unless this
        transport was given an explicit level, its level.

        Re-attaching to another producer overwrites both. Only one parent is
        tracked; producers sharing a transport must share a severity table.
        """
        self.levels = producer.levels
        if not self._explicit_level:
            self.level = producer.level
        self._parent_ref = weakref.ref(producer)

        emit(
            TransportAttached(
                transport=self.name,
                producer=_label(producer),
                threshold=self.level,
                level_count=len(self.levels) if self.levels is not None else 0,
                inherited_level=not self._explicit_level,
            )
        )

    def detach(self, producer: Parent) -> None:
        """Release from ``producer`` and run the teardown hook.

        Does nothing unless ``producer`` is the current parent, so a detach
        from some other producer sharing this transport cannot tear it down.
        """
        if producer is not self.parent:
            emit(StaleDetachIgnored(transport=self.name, producer=_label(producer)))
            return

        self._parent_ref = None
        teardown = self._sink.close
        emit(
            TransportDetached(
                transport=self.name,
                producer=_label(producer),
                teardown=teardown is not None,
            )
        )
        if teardown is not None:
            teardown()

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    @property
    def threshold(self) -> str | None:
        """Effective level: our own, else the parent's, else None (accept all)."""
        if self.level:
            return self.level
        parent = self.parent
        if parent is not None:
            return parent.level
        return None

    def accepts(self, record: Record) -> bool:
        """Whether ``record`` should reach the sink. Pure; never raises."""
        if self.silent:
            return False
        if record.exception is True:
            return bool(self.handle_exceptions)

        threshold = self.threshold
        if not threshold or self.levels is None:
            return True

        limit = priority(self.levels, threshold)
        severity = priority(self.levels, record.canonical_level)
        if limit is None or severity is None:
            return False
        return limit >= severity

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, record: Record, done: Done = noop) -> None:
        """Filter, format and deliver a single record."""
        _, fault = self._process(record, done)
        if fault is not None:
            self._report_faults([fault])

    def dispatch_batch(self, writes: Sequence[PendingWrite], done: Done = noop) -> None:
        """Filter, format and deliver several buffered records, in order.

        With a batch sink, accepted writes go to ``logv`` in one call and
        rejected ones are completed here. Without one, each write runs the
        single-record pipeline; a format fault does not stop the rest of the
        batch, and all faults are reported after ``done`` has fired.
        """
        if self._sink.logv is not None:
            accepted: list[PendingWrite] = []
            for write in writes:
                if self.accepts(write.record):
                    accepted.append(write)
                else:
                    write.done(None)

            emit(
                BatchDispatched(
                    transport=self.name,
                    received=len(writes),
                    accepted=len(accepted),
                    batched=True,
                )
            )
            if not accepted:
                done(None)
                return
            self._sink.logv(accepted, done)
            return

        faults: list[FormatError] = []
        delivered = 0
        for write in writes:
            passed, fault = self._process(write.record, write.done)
            delivered += passed
            if fault is not None:
                faults.append(fault)

        emit(
            BatchDispatched(
                transport=self.name,
                received=len(writes),
                accepted=delivered,
                batched=False,
            )
        )
        done(None)
        self._report_faults(faults)

    def _process(self, record: Record, done: Done) -> tuple[bool, FormatError | None]:
        """Run one record through the pipeline.

        Returns whether the record passed ``accepts()`` and the fault to
        report, if any.

        ``done`` has always been handed off (to the sink) or called by the
        time this returns.
        """
        if not self.accepts(record):
            done(None)
            return False, None

        if self.format is None:
            self._sink.log(record, done)
            return True, None

        try:
            formatted = self.format.transform(record.copy(), self._format_options)
        except Exception as exc:
            done(None)
            fault = FormatError(
                f"format failed for {record.canonical_level!r} record: {exc}",
                record=record,
            )
            fault.__cause__ = exc
            return True, fault

        if not formatted:
            done(None)
            return True, None

        self._sink.log(formatted, done)
        return True, None

    # ------------------------------------------------------------------
    # Faults
    # ------------------------------------------------------------------

    def add_error_listener(self, listener: ErrorListener) -> None:
        if listener not in self._error_listeners:
            self._error_listeners.append(listener)

    def remove_error_listener(self, listener: ErrorListener) -> None:
        if listener in self._error_listeners:
            self._error_listeners.remove(listener)

    def _report_faults(self, faults: Sequence[TransportError]) -> None:
        """Hand each fault to the error listeners, or raise when nobody listens."""
        if not faults:
            return

        listeners = list(self._error_listeners)
        for fault in faults:
            emit(
                TransportFaulted(
                    transport=self.name,
                    kind="sink" if isinstance(fault, SinkError) else "format",
                    error=str(fault),
                    record_level=fault.record.canonical_level if isinstance(fault, FormatError) else None,
                    listeners=len(listeners),
                )
            )

        if listeners:
            for fault in faults:
                for listener in listeners:
                    listener(fault)
            return

        if len(faults) == 1:
            raise faults[0]
        raise ExceptionGroup(f"{self.name}: {len(faults)} faults in batch", list(faults))
