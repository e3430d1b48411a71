"""logtransport observability: lifecycle events and structured logging.

Public API:
    configure(cfg)  -- Set up logging + emitter + subscribers (call once at startup)
    emit(event)     -- Fire-and-forget event emission (no-op if not configured)
    reset()         -- Undo configure()
    get_logger(name)
"""

from logtransport.observability.config import ObservabilityConfig
from logtransport.observability.emitter import configure, emit, is_configured, reset
from logtransport.observability.events import (
    BatchDispatched,
    LegacyErrorBridged,
    StaleDetachIgnored,
    TransportAttached,
    TransportDetached,
    TransportFaulted,
)
from logtransport.observability.logging import get_logger

__all__ = [
    # Core API
    "emit",
    "configure",
    "is_configured",
    "reset",
    "ObservabilityConfig",
    "get_logger",
    # Binding lifecycle
    "TransportAttached",
    "TransportDetached",
    "StaleDetachIgnored",
    # Dispatch
    "BatchDispatched",
    "TransportFaulted",
    # Legacy adapter
    "LegacyErrorBridged",
]
