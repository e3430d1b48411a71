"""Typed event dataclasses for transport lifecycle observability.

All events are frozen (immutable) dataclasses. Transports emit these;
they don't know about logs. Subscribers handle routing.
"""

from __future__ import annotations

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Binding lifecycle
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TransportAttached:
    transport: str
    producer: str
    threshold: str | None
    level_count: int
    inherited_level: bool


@dataclass(frozen=True)
class TransportDetached:
    transport: str
    producer: str
    teardown: bool


@dataclass(frozen=True)
class StaleDetachIgnored:
    transport: str
    producer: str


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BatchDispatched:
    transport: str
    received: int
    accepted: int
    batched: bool  # True when handed to a batch sink in one call


@dataclass(frozen=True)
class TransportFaulted:
    transport: str
    kind: str  # "format" | "sink"
    error: str
    record_level: str | None
    listeners: int


# ---------------------------------------------------------------------------
# Legacy adapter
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LegacyErrorBridged:
    transport: str
    sink: str
