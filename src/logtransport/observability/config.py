"""Observability settings read from LOGTRANSPORT_* environment variables.

    LOGTRANSPORT_LOG_LEVEL       root level for diagnostics (default INFO)
    LOGTRANSPORT_LOG_FORMAT      json (default) | console
    LOGTRANSPORT_EVENTS_ENABLED  emit lifecycle events (default on)

Nothing needs to be set; the defaults give JSON lines on stderr.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "on")


@dataclass
class ObservabilityConfig:
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOGTRANSPORT_LOG_LEVEL", "INFO")
    )

    log_format: str = field(
        default_factory=lambda: os.environ.get("LOGTRANSPORT_LOG_FORMAT", "json")
    )  # "json" | "console"

    # Off: configure() sets up logging only and emit() stays a no-op.
    events_enabled: bool = field(
        default_factory=lambda: _env_flag("LOGTRANSPORT_EVENTS_ENABLED", "true")
    )
