"""Log sinks and the sink type table.

The table maps a config's ``type`` to a factory taking the config mapping.
Only names registered here can be built; nothing is imported by name.

    from scopelog.sinks import register_sink_type
    register_sink_type("syslog", SyslogSink)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from scopelog.sinks.base import BaseSink, LogSink
from scopelog.sinks.file_sink import FileSink
from scopelog.sinks.memory_sink import MemorySink
from scopelog.sinks.structlog_sink import StructlogSink

SinkFactory = Callable[[Mapping[str, Any]], LogSink]

_BUILTIN: dict[str, SinkFactory] = {
    "memory": MemorySink,
    "array": MemorySink,
    "file": FileSink,
    "structlog": StructlogSink,
}

_sink_types: dict[str, SinkFactory] = dict(_BUILTIN)


def register_sink_type(name: str, factory: SinkFactory) -> None:
    _sink_types[name] = factory


def get_sink_factory(name: str) -> SinkFactory | None:
    return _sink_types.get(name)


def available_sink_types() -> list[str]:
    return list(_sink_types)


def reset_sink_types() -> None:
    """Restore the built-in table. Use in test fixtures for isolation."""
    _sink_types.clear()
    _sink_types.update(_BUILTIN)


__all__ = [
    "LogSink",
    "BaseSink",
    "MemorySink",
    "FileSink",
    "StructlogSink",
    "SinkFactory",
    "register_sink_type",
    "get_sink_factory",
    "available_sink_types",
    "reset_sink_types",
]
