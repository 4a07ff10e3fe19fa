"""scopelog: level- and scope-filtered log dispatch to pluggable sinks.

Public API:
    LogRegistry            — sink configs, lazy sink instances, dispatch
    LogConfig              — env-var defaults + YAML sink file
    interpolate()          — "{placeholder}" rendering
    can_handle()           — the admission predicate
    AmbientContext, MappingContext, bind_request — reserved-key context

Sinks (see scopelog.sinks):
    MemorySink ("memory"/"array"), FileSink ("file"), StructlogSink ("structlog")
    register_sink_type(name, factory) adds a variant
"""

from scopelog.admission import can_handle, normalize_filter
from scopelog.config import LogConfig, load_sinks
from scopelog.context import (
    RESERVED_KEYS,
    AmbientContext,
    ContextProvider,
    MappingContext,
    bind_request,
)
from scopelog.errors import (
    ConfigExistsError,
    InvalidConfigError,
    InvalidHandlerError,
    InvalidLevelError,
    InvalidPathError,
    LogError,
)
from scopelog.interpolate import interpolate
from scopelog.levels import LEVELS, is_level
from scopelog.registry import DEFAULT, LogRegistry
from scopelog.sinks import (
    BaseSink,
    FileSink,
    LogSink,
    MemorySink,
    StructlogSink,
    available_sink_types,
    register_sink_type,
)

__all__ = [
    # Registry
    "LogRegistry",
    "DEFAULT",
    # Config
    "LogConfig",
    "load_sinks",
    # Core functions
    "interpolate",
    "can_handle",
    "normalize_filter",
    "LEVELS",
    "is_level",
    # Context
    "RESERVED_KEYS",
    "ContextProvider",
    "AmbientContext",
    "MappingContext",
    "bind_request",
    # Sinks
    "LogSink",
    "BaseSink",
    "MemorySink",
    "FileSink",
    "StructlogSink",
    "register_sink_type",
    "available_sink_types",
    # Errors
    "LogError",
    "ConfigExistsError",
    "InvalidConfigError",
    "InvalidHandlerError",
    "InvalidLevelError",
    "InvalidPathError",
]
