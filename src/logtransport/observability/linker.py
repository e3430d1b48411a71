"""Event namespace for transport lifecycle events."""

from __future__ import annotations

from pyventus.events import EventLinker


class TransportEventLinker(EventLinker):
    """Subscribers to transport events, kept apart from the host's own pyventus linkers."""
