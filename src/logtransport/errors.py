"""Transport error taxonomy."""

from __future__ import annotations

from typing import Any

from logtransport.record import Record


class TransportError(Exception):
    """Base class for faults surfaced by a transport."""


class InvalidTransportError(TransportError, ValueError):
    """Raised at construction when a transport is misconfigured."""


class FormatError(TransportError):
    """A format transform raised while processing ``record``.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, *, record: Record) -> None:
        super().__init__(message)
        self.record = record


class SinkError(TransportError):
    """A legacy sink reported an error on its own error channel."""

    def __init__(self, message: str, *, sink: Any) -> None:
        super().__init__(message)
        self.sink = sink
