"""Producer: the host side of the attach/detach handshake.

Owns the severity table and default level, fans records out to attached
transports, and counts completions that have not come back yet. Hosts
that embed transports in their own logger can use it directly or treat it
as the reference for what a producer must do.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from logtransport.base import Done, PendingWrite
from logtransport.errors import TransportError
from logtransport.levels import NPM_LEVELS, SeverityTable
from logtransport.record import Record
from logtransport.transport import Transport


def _raise_faults(faults: list[Exception]) -> None:
    if not faults:
        return
    if len(faults) == 1:
        raise faults[0]
    raise ExceptionGroup(f"{len(faults)} transports faulted", faults)


class Producer:
    """Feeds records to its transports and tracks outstanding completions."""

    def __init__(self, *, levels: SeverityTable = NPM_LEVELS, level: str | None = None) -> None:
        self.levels = levels
        self.level = level
        self.transports: list[Transport] = []
        self._pending = 0

    @property
    def pending(self) -> int:
        """Records handed to transports whose completion hasn't fired yet."""
        return self._pending

    def add(self, transport: Transport) -> None:
        if transport in self.transports:
            return
        self.transports.append(transport)
        transport.attach(self)

    def remove(self, transport: Transport) -> None:
        if transport not in self.transports:
            return
        self.transports.remove(transport)
        transport.detach(self)

    def close(self) -> None:
        for transport in list(self.transports):
            self.remove(transport)

    def log(self, level: str, message: str = "", **meta: Any) -> Record:
        exception = bool(meta.pop("exception", False))
        record = Record(level=level, message=message, exception=exception, meta=meta)
        self.write(record)
        return record

    def write(self, record: Record) -> None:
        """Dispatch ``record`` to every transport.

        A fault raised by one transport does not keep the record from the
        others; faults are re-raised once every transport has been fed.
        """
        faults: list[Exception] = []
        for transport in list(self.transports):
            try:
                transport.dispatch(record, self._track())
            except (TransportError, ExceptionGroup) as exc:
                faults.append(exc)
        _raise_faults(faults)

    def write_batch(self, records: Iterable[Record]) -> None:
        records = list(records)
        faults: list[Exception] = []
        for transport in list(self.transports):
            writes = [PendingWrite(record=r, done=self._track()) for r in records]
            try:
                transport.dispatch_batch(writes)
            except (TransportError, ExceptionGroup) as exc:
                faults.append(exc)
        _raise_faults(faults)

    def _track(self) -> Done:
        self._pending += 1
        fired = False

        def done(err: BaseException | None = None) -> None:
            nonlocal fired
            if fired:
                return
            fired = True
            self._pending -= 1

        return done
