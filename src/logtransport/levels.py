"""Severity tables: level name -> priority, lower number = more severe.

Tables are owned by the producer and shared by reference with every
transport attached to it. Transports only ever read them.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

SeverityTable = Mapping[str, int]

NPM_LEVELS: SeverityTable = MappingProxyType(
    {
        "error": 0,
        "warn": 1,
        "info": 2,
        "http": 3,
        "verbose": 4,
        "debug": 5,
        "silly": 6,
    }
)

SYSLOG_LEVELS: SeverityTable = MappingProxyType(
    {
        "emerg": 0,
        "alert": 1,
        "crit": 2,
        "error": 3,
        "warning": 4,
        "notice": 5,
        "info": 6,
        "debug": 7,
    }
)

CLI_LEVELS: SeverityTable = MappingProxyType(
    {
        "error": 0,
        "warn": 1,
        "help": 2,
        "data": 3,
        "info": 4,
        "debug": 5,
        "prompt": 6,
        "verbose": 7,
        "input": 8,
        "silly": 9,
    }
)


def priority(levels: SeverityTable | None, name: str | None) -> int | None:
    """Look up the priority of ``name``. Never raises.

    Returns None when there is no table, no name, or the name is unknown.
    """
    if levels is None or name is None:
        return None
    return levels.get(name)
