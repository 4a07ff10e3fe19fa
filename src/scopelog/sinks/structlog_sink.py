"""Structlog sink: forward admitted lines into the host's structlog pipeline.

structlog has no emergency/alert/notice methods, so those map onto the
nearest stdlib-style level. The original level travels as ``scopelog_level``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

import structlog

from scopelog.sinks.base import BaseSink

_METHODS = {
    "emergency": "critical",
    "alert": "critical",
    "critical": "critical",
    "error": "error",
    "warning": "warning",
    "notice": "info",
    "info": "info",
    "debug": "debug",
}


class StructlogSink(BaseSink):
    """Emit each event as a structlog event named by the rendered message."""

    defaults: ClassVar[dict[str, Any]] = {
        "logger": "scopelog",
    }

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        super().__init__(options)
        self._logger = structlog.get_logger(self._config["logger"])

    def handle(self, level: str, message: str) -> None:
        method = getattr(self._logger, _METHODS.get(level, "info"))
        method(message, scopelog_level=level)
