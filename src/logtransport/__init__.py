"""logtransport: base abstraction for log transports.

A Transport filters records by severity and exception policy, applies an
optional format to a copy of each record, and hands the result to a sink,
signalling completion for every record so producers can apply backpressure.

Public API:
    Transport, BindingState     -- base transport and its binding state
    LegacyTransport             -- adapter for log(level, message, meta, done) sinks
    Producer                    -- reference producer driving attach/detach
    Record, PendingWrite        -- records and batch entries
    NPM_LEVELS, SYSLOG_LEVELS, CLI_LEVELS -- stock severity tables
"""

from logtransport.base import (
    BatchSink,
    Done,
    ErrorChannel,
    FormatStage,
    LegacySink,
    Parent,
    PendingWrite,
    Sink,
    SinkBinding,
    noop,
)
from logtransport.errors import (
    FormatError,
    InvalidTransportError,
    SinkError,
    TransportError,
)
from logtransport.legacy import LegacyTransport
from logtransport.levels import CLI_LEVELS, NPM_LEVELS, SYSLOG_LEVELS, SeverityTable, priority
from logtransport.producer import Producer
from logtransport.record import Record
from logtransport.transport import BindingState, Transport

__version__ = "0.1.0"

__all__ = [
    # Core
    "Transport",
    "BindingState",
    "LegacyTransport",
    "Producer",
    # Records
    "Record",
    "PendingWrite",
    # Levels
    "SeverityTable",
    "NPM_LEVELS",
    "SYSLOG_LEVELS",
    "CLI_LEVELS",
    "priority",
    # Capabilities
    "Sink",
    "BatchSink",
    "FormatStage",
    "Parent",
    "LegacySink",
    "ErrorChannel",
    "SinkBinding",
    "Done",
    "noop",
    # Errors
    "TransportError",
    "InvalidTransportError",
    "FormatError",
    "SinkError",
]
