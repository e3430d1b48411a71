"""Structured logging for transport diagnostics.

logtransport writes two kinds of lines about itself: lifecycle events
routed by the structlog subscriber, and the legacy adapter's deprecation
notice. Both go through get_logger(), so call sites pass key/value pairs
and never format strings.

setup_logging() installs one structlog-rendered stderr handler on the root
logger. Until then get_logger() hands out loggers that forward to plain
stdlib logging, so a host that configures logging itself still sees the
lines, with the key/value pairs attached as LogRecord extras.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from logtransport.observability.config import ObservabilityConfig

# Marks the root handler installed here so teardown leaves others alone.
_MANAGED = "_logtransport_managed"

_configured: bool = False


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]


def _renderer(config: ObservabilityConfig) -> structlog.types.Processor:
    if config.log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def _drop_managed_handlers(root: logging.Logger) -> None:
    for handler in [h for h in root.handlers if getattr(h, _MANAGED, False)]:
        root.removeHandler(handler)
        handler.close()


def setup_logging(config: ObservabilityConfig) -> None:
    """Route structlog through stdlib and render it on stderr."""
    global _configured

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(config),
            ],
        )
    )
    setattr(handler, _MANAGED, True)

    root = logging.getLogger()
    _drop_managed_handlers(root)
    root.addHandler(handler)
    root.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))

    _configured = True


def get_logger(name: str = "", **initial_values: Any) -> Any:
    """A structlog logger bound to ``name``.

    Before setup_logging() the event dict is handed to the stdlib logger
    as ``msg`` plus ``extra`` instead of being rendered.
    """
    if _configured:
        return structlog.get_logger(name, **initial_values)
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[structlog.stdlib.render_to_log_kwargs],
        wrapper_class=structlog.stdlib.BoundLogger,
        **initial_values,
    )


def shutdown_logging() -> None:
    """Remove the managed handler and return structlog to its defaults."""
    global _configured

    _drop_managed_handlers(logging.getLogger())
    structlog.reset_defaults()
    _configured = False
