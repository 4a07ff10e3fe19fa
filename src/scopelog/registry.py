"""LogRegistry: sink configs by key, lazily built sink instances, dispatch.

Lifecycle:
    registry = LogRegistry()                       # empty
    registry.set_config("default", {"type": "file", "path": "logs"})
    registry.error("payment {id} failed", {"id": 42})   # builds "default" on first use
    registry.unload("default")                     # drops instance and config

Dispatch is synchronous and in set_config() insertion order. An error
raised by one sink propagates and the remaining sinks do not see the
event. Callers that need isolation wrap their sinks.

There is no module-level instance: the host owns its registry and passes
it where it is needed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from scopelog.config import LogConfig
from scopelog.context import AmbientContext, ContextProvider
from scopelog.errors import ConfigExistsError, InvalidConfigError, InvalidHandlerError
from scopelog.interpolate import interpolate
from scopelog.levels import require_level
from scopelog.sinks import LogSink, available_sink_types, get_sink_factory

logger = logging.getLogger(__name__)

DEFAULT = "default"

Scope = str | Iterable[str] | None


class LogRegistry:
    """Registry of sink configs and their lazily built instances."""

    def __init__(
        self,
        configs: Mapping[str, Mapping[str, Any]] | None = None,
        *,
        context: ContextProvider | None = None,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        self._configs: dict[str, Mapping[str, Any]] = {}
        self._instances: dict[str, LogSink] = {}
        self._context: ContextProvider = context if context is not None else AmbientContext()
        self._defaults: dict[str, Any] = dict(defaults or {})
        if configs:
            self.set_configs(configs)

    @classmethod
    def from_config(
        cls,
        config: LogConfig | None = None,
        context: ContextProvider | None = None,
    ) -> LogRegistry:
        """Build a registry from env defaults and the YAML sink file."""
        cfg = config or LogConfig()
        return cls(cfg.load_sinks(), context=context, defaults=cfg.sink_defaults())

    # ------------------------------------------------------------------
    # Configs
    # ------------------------------------------------------------------

    def set_config(self, key: str, config: Mapping[str, Any]) -> LogRegistry:
        """Store ``config`` under ``key``. Existing keys must be unloaded first."""
        if key in self._configs:
            raise ConfigExistsError(f"Log sink config already exists: {key!r}")
        if not isinstance(config, Mapping):
            raise InvalidConfigError(
                f"Log sink config {key!r} must be a mapping, got {type(config).__name__}"
            )
        self._configs[key] = MappingProxyType(dict(config))
        return self

    def set_configs(self, configs: Mapping[str, Mapping[str, Any]]) -> LogRegistry:
        for key, config in configs.items():
            self.set_config(key, config)
        return self

    def get_config(self, key: str | None = None) -> Any:
        """Config for ``key`` (None if absent), or all configs when key is omitted."""
        if key is None:
            return dict(self._configs)
        return self._configs.get(key)

    def has_config(self, key: str = DEFAULT) -> bool:
        return key in self._configs

    def is_loaded(self, key: str = DEFAULT) -> bool:
        return key in self._instances

    def unload(self, key: str = DEFAULT) -> LogRegistry:
        """Drop the instance and config for ``key``. No-op if absent."""
        if self._instances.pop(key, None) is not None:
            logger.debug("Unloaded log sink %r", key)
        self._configs.pop(key, None)
        return self

    def clear(self) -> None:
        self._configs.clear()
        self._instances.clear()

    # ------------------------------------------------------------------
    # Instances
    # ------------------------------------------------------------------

    def build(self, config: Mapping[str, Any]) -> LogSink:
        """Construct a sink from ``config["type"]`` via the sink type table."""
        if not isinstance(config, Mapping):
            raise InvalidConfigError(
                f"Log sink config must be a mapping, got {type(config).__name__}"
            )

        sink_type = config.get("type")
        if sink_type is None:
            raise InvalidHandlerError(
                f"Log sink config has no 'type'. Available: {available_sink_types()}"
            )

        factory = get_sink_factory(sink_type) if isinstance(sink_type, str) else None
        if factory is None:
            raise InvalidHandlerError(
                f"Unknown log sink type: {sink_type!r}. Available: {available_sink_types()}"
            )

        sink = factory({**self._defaults, **config})
        if not isinstance(sink, LogSink):
            raise InvalidHandlerError(
                f"Log sink type {sink_type!r} built {type(sink).__name__}, which is not a LogSink"
            )

        logger.debug("Built %s log sink", sink_type)
        return sink

    def use(self, key: str = DEFAULT) -> LogSink:
        """Shared instance for ``key``, built and cached on first access."""
        instance = self._instances.get(key)
        if instance is None:
            if key not in self._configs:
                raise InvalidHandlerError(
                    f"No log sink config for key: {key!r}. Configured: {list(self._configs)}"
                )
            instance = self.build(self._configs[key])
            self._instances[key] = instance
        return instance

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle(
        self,
        level: str,
        message: str,
        data: Mapping[str, Any] | None = None,
        scope: Scope = None,
    ) -> None:
        """Interpolate once, then hand the line to every admitting sink."""
        require_level(level)
        rendered = interpolate(message, data, self._context)

        for key in list(self._configs):
            sink = self.use(key)
            if not sink.can_handle(level, scope):
                continue
            sink.handle(level, rendered)

    def log(
        self,
        level: str,
        message: str,
        data: Mapping[str, Any] | None = None,
        scope: Scope = None,
    ) -> None:
        self.handle(level, message, data, scope)

    def emergency(self, message: str, data: Mapping[str, Any] | None = None, scope: Scope = None) -> None:
        self.handle("emergency", message, data, scope)

    def alert(self, message: str, data: Mapping[str, Any] | None = None, scope: Scope = None) -> None:
        self.handle("alert", message, data, scope)

    def critical(self, message: str, data: Mapping[str, Any] | None = None, scope: Scope = None) -> None:
        self.handle("critical", message, data, scope)

    def error(self, message: str, data: Mapping[str, Any] | None = None, scope: Scope = None) -> None:
        self.handle("error", message, data, scope)

    def warning(self, message: str, data: Mapping[str, Any] | None = None, scope: Scope = None) -> None:
        self.handle("warning", message, data, scope)

    def notice(self, message: str, data: Mapping[str, Any] | None = None, scope: Scope = None) -> None:
        self.handle("notice", message, data, scope)

    def info(self, message: str, data: Mapping[str, Any] | None = None, scope: Scope = None) -> None:
        self.handle("info", message, data, scope)

    def debug(self, message: str, data: Mapping[str, Any] | None = None, scope: Scope = None) -> None:
        self.handle("debug", message, data, scope)
