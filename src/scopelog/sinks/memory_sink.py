"""In-memory sink: keeps rendered lines in a list. For tests and introspection."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from scopelog.sinks.base import BaseSink


class MemorySink(BaseSink):
    """Append formatted lines to an in-process list. No rotation, no persistence."""

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        super().__init__(options)
        self._content: list[str] = []

    def handle(self, level: str, message: str) -> None:
        self._content.append(self.format(level, message))

    def read(self) -> list[str]:
        """The live list of lines, oldest first. Not a copy."""
        return self._content

    def clear(self) -> None:
        self._content.clear()
