"""LogSink protocol and the shared BaseSink implementation.

A sink receives an already interpolated message for an admitted event and
persists it. BaseSink carries what every built-in sink shares: the merged
config snapshot, the admission filters and the line formatter.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, ClassVar, Protocol, runtime_checkable

from scopelog.admission import can_handle, normalize_filter
from scopelog.context import ContextProvider
from scopelog.interpolate import interpolate
from scopelog.levels import require_level


@runtime_checkable
class LogSink(Protocol):
    """Where rendered log lines go."""

    def can_handle(self, level: str, scope: str | Iterable[str] | None = None) -> bool: ...

    def handle(self, level: str, message: str) -> None: ...


class BaseSink:
    """Config merging, admission and formatting for concrete sinks.

    Config precedence: BaseSink.defaults < subclass defaults < options.
    """

    defaults: ClassVar[dict[str, Any]] = {
        "date_format": "%Y-%m-%d %H:%M:%S",
        "levels": None,
        "scopes": [],
    }

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        config = {**BaseSink.defaults, **type(self).defaults, **(options or {})}
        config["levels"] = normalize_filter(config["levels"], "levels")
        config["scopes"] = normalize_filter(config["scopes"], "scopes")
        self._config = config

    @property
    def config(self) -> dict[str, Any]:
        return self._config

    def can_handle(self, level: str, scope: str | Iterable[str] | None = None) -> bool:
        return can_handle(self._config["levels"], self._config["scopes"], level, scope)

    def format(self, level: str, message: str, include_date: bool = True) -> str:
        prefix = f"{datetime.now().strftime(self._config['date_format'])} " if include_date else ""
        return f"{prefix}[{level.upper()}] {message}"

    def log(
        self,
        level: str,
        message: str,
        data: Mapping[str, Any] | None = None,
        context: ContextProvider | None = None,
    ) -> None:
        """Interpolate and handle directly, bypassing any registry.

        Reserved keys resolve only when ``context`` is given.
        """
        self.handle(require_level(level), interpolate(message, data, context))

    def handle(self, level: str, message: str) -> None:
        raise NotImplementedError
