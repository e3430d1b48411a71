"""The log record passed from producer to transport to sink."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Record:
    """One structured log entry.

    ``level`` is for display and may be rewritten by a format.
    ``canonical_level`` is the key used for priority lookups; it defaults to
    ``level`` and must survive any format applied to a copy.
    """

    level: str
    message: str = ""
    exception: bool = False
    meta: dict[str, Any] = field(default_factory=dict)
    canonical_level: str = ""

    def __post_init__(self) -> None:
        if not self.canonical_level:
            self.canonical_level = self.level

    def copy(self) -> Record:
        """Shallow copy: new record and new meta dict, same meta values."""
        return Record(
            level=self.level,
            message=self.message,
            exception=self.exception,
            meta=dict(self.meta),
            canonical_level=self.canonical_level,
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {**self.meta, "level": self.level, "message": self.message}
        if self.exception:
            d["exception"] = True
        return d
