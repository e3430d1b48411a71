"""LegacyTransport: adapter for sinks with the older ``log(level, message, meta, done)`` shape.

Errors a legacy sink reports on its own error channel are rebroadcast on
the adapter as ``SinkError``. A sink may be wrapped by several adapters;
the bridge registry below makes sure it only ever gets one listener, and
the sink object itself is never modified.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Any

from logtransport.base import Done, ErrorChannel, LegacySink, noop
from logtransport.errors import InvalidTransportError, SinkError
from logtransport.observability.emitter import emit
from logtransport.observability.events import LegacyErrorBridged
from logtransport.observability.logging import get_logger
from logtransport.record import Record
from logtransport.transport import Transport


@dataclass(frozen=True)
class _ErrorBridge:
    """One subscription on a sink's error channel.

    Holds nothing strongly: the sink's own listener list keeps the
    adapter alive, and the finalizer drops the entry once the sink is
    collected.
    """

    sink: weakref.ref
    listener: weakref.WeakMethod
    owner: str
    finalizer: weakref.finalize


# id(sink) -> bridge. Entries leave on close() or when the sink is collected.
_ERROR_BRIDGES: dict[int, _ErrorBridge] = {}


def bridge_for(sink: Any) -> _ErrorBridge | None:
    """The error bridge installed on ``sink``, if any."""
    bridge = _ERROR_BRIDGES.get(id(sink))
    if bridge is None or bridge.sink() is not sink:
        return None
    return bridge


class LegacyTransport(Transport):
    """Wraps a legacy sink so it can be attached like any other transport.

    ``level`` and ``handle_exceptions`` fall back to the sink's own values
    when not given here.
    """

    def __init__(self, *, sink: LegacySink | None = None, **options: Any) -> None:
        if sink is None or not callable(getattr(sink, "log", None)):
            raise InvalidTransportError(
                "Invalid transport, must be an object with a log method."
            )

        super().__init__(**options)
        self.sink = sink
        if self.level is None:
            self.level = getattr(sink, "level", None)
            self._explicit_level = self.level is not None
        self.handle_exceptions = bool(
            self.handle_exceptions or getattr(sink, "handle_exceptions", False)
        )

        self._deprecated()
        self._bridge_errors()

    def log(self, record: Record, done: Done) -> None:
        self.sink.log(record.canonical_level, record.message, record, noop)
        done(None)

    def close(self) -> None:
        """Close the wrapped sink and drop its error bridge. Safe to repeat."""
        sink_close = getattr(self.sink, "close", None)
        if callable(sink_close):
            sink_close()

        bridge = _ERROR_BRIDGES.pop(id(self.sink), None)
        if bridge is None:
            return
        bridge.finalizer.detach()
        listener = bridge.listener()
        if listener is not None:
            self.sink.remove_error_listener(listener)

    def _bridge_errors(self) -> None:
        if not isinstance(self.sink, ErrorChannel):
            return
        if id(self.sink) in _ERROR_BRIDGES:
            return

        key = id(self.sink)
        self.sink.add_error_listener(self._forward_sink_error)
        _ERROR_BRIDGES[key] = _ErrorBridge(
            sink=weakref.ref(self.sink),
            listener=weakref.WeakMethod(self._forward_sink_error),
            owner=self.name,
            finalizer=weakref.finalize(self.sink, _ERROR_BRIDGES.pop, key, None),
        )
        emit(LegacyErrorBridged(transport=self.name, sink=self._sink_name))

    def _forward_sink_error(self, err: BaseException) -> None:
        fault = SinkError(f"{self._sink_name}: {err}", sink=self.sink)
        fault.__cause__ = err
        self._report_faults([fault])

    @property
    def _sink_name(self) -> str:
        return getattr(self.sink, "name", None) or type(self.sink).__name__

    def _deprecated(self) -> None:
        """Log the upgrade notice. Overridden in tests to keep output quiet."""
        get_logger("logtransport.legacy").warning(
            "legacy_transport.deprecated",
            sink=self._sink_name,
            hint=(
                f"{self._sink_name} is a legacy transport. "
                "Consider upgrading it to implement log(record, done)."
            ),
        )
