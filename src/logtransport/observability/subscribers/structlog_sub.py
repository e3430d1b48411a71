"""Routes every transport event to one structured log line.

Registered by emitter.configure() when events are enabled. Fault events log
at error level, everything else at debug.
"""

from __future__ import annotations

from dataclasses import asdict

from logtransport.observability.events import (
    BatchDispatched,
    LegacyErrorBridged,
    StaleDetachIgnored,
    TransportAttached,
    TransportDetached,
    TransportFaulted,
)
from logtransport.observability.linker import TransportEventLinker
from logtransport.observability.logging import get_logger


def _get_logger():
    """Lazy logger -- always reflects the active formatter, not stale import-time state."""
    return get_logger("logtransport.events")


def _to_dict(event: object) -> dict:
    return asdict(event)  # type: ignore[arg-type]


def register_structlog_subscriber() -> None:
    """Register log handlers for all events on TransportEventLinker."""

    # Binding lifecycle
    @TransportEventLinker.on(TransportAttached)
    def _log_attached(event: TransportAttached) -> None:
        _get_logger().debug("transport.attached", **_to_dict(event))

    @TransportEventLinker.on(TransportDetached)
    def _log_detached(event: TransportDetached) -> None:
        _get_logger().debug("transport.detached", **_to_dict(event))

    @TransportEventLinker.on(StaleDetachIgnored)
    def _log_stale_detach(event: StaleDetachIgnored) -> None:
        _get_logger().debug("transport.detach.ignored", **_to_dict(event))

    # Dispatch
    @TransportEventLinker.on(BatchDispatched)
    def _log_batch(event: BatchDispatched) -> None:
        _get_logger().debug("transport.batch.dispatched", **_to_dict(event))

    @TransportEventLinker.on(TransportFaulted)
    def _log_fault(event: TransportFaulted) -> None:
        _get_logger().error("transport.faulted", **_to_dict(event))

    # Legacy adapter
    @TransportEventLinker.on(LegacyErrorBridged)
    def _log_bridged(event: LegacyErrorBridged) -> None:
        _get_logger().debug("legacy_transport.error_bridged", **_to_dict(event))
