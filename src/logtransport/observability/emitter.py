"""Process-wide event emitter for transports.

Transports call emit() at attach, detach, batch and fault points and do not
care who listens. Until a host calls configure(), emit() drops the event,
so a library user who never opts in pays one None check per call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pyventus.events import EventEmitter

if TYPE_CHECKING:
    from logtransport.observability.config import ObservabilityConfig

_emitter: EventEmitter | None = None
_configured: bool = False


def emit(event: Any) -> None:
    if _emitter is not None:
        _emitter.emit(event)


def configure(config: ObservabilityConfig | None = None) -> EventEmitter | None:
    """Install diagnostics logging and, if enabled, the event emitter.

    Only the first call has an effect; later calls return whatever the first
    one produced (None when events are disabled).
    """
    global _emitter, _configured

    if _configured:
        return _emitter

    from logtransport.observability.config import ObservabilityConfig
    from logtransport.observability.logging import setup_logging

    cfg = config or ObservabilityConfig()
    setup_logging(cfg)

    if cfg.events_enabled:
        from pyventus.core.processing.asyncio import AsyncIOProcessingService

        from logtransport.observability.linker import TransportEventLinker
        from logtransport.observability.subscribers.structlog_sub import (
            register_structlog_subscriber,
        )

        register_structlog_subscriber()
        _emitter = EventEmitter(
            event_linker=TransportEventLinker,
            event_processor=AsyncIOProcessingService(),
        )

    _configured = True
    return _emitter


def is_configured() -> bool:
    return _configured


def reset() -> None:
    """Undo configure(): drop the emitter, its subscribers and the log handler."""
    global _emitter, _configured

    from logtransport.observability.linker import TransportEventLinker
    from logtransport.observability.logging import shutdown_logging

    _emitter = None
    TransportEventLinker.remove_all()
    shutdown_logging()
    _configured = False
