"""scopelog configuration: env-var defaults plus a YAML sink file.

Priority: explicit field value > env var > default.

    SCOPELOG_CONFIG       YAML file with sink configs (~/.scopelog/sinks.yaml)
    SCOPELOG_DATE_FORMAT  strftime format for line timestamps
    SCOPELOG_PATH         default directory for file sinks
    SCOPELOG_MAX_SIZE     default rotation threshold in bytes

The YAML file holds either a top-level ``sinks:`` mapping or the mapping
itself:

    sinks:
      default:
        type: file
        path: /var/log/myapp
      audit:
        type: file
        file: audit
        scopes: [audit]
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from scopelog.errors import InvalidConfigError

_DEFAULT_CONFIG_PATH = "~/.scopelog/sinks.yaml"


def _int_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise InvalidConfigError(f"{var}={raw!r} is not a valid integer") from err


@dataclass
class LogConfig:
    """Process-level defaults for registries built with LogRegistry.from_config()."""

    config_path: Path = field(
        default_factory=lambda: Path(
            os.environ.get("SCOPELOG_CONFIG", _DEFAULT_CONFIG_PATH)
        ).expanduser()
    )
    date_format: str = field(
        default_factory=lambda: os.environ.get("SCOPELOG_DATE_FORMAT", "%Y-%m-%d %H:%M:%S")
    )
    log_path: str = field(
        default_factory=lambda: os.environ.get("SCOPELOG_PATH", "/var/log/")
    )
    max_size: int = field(default_factory=lambda: _int_env("SCOPELOG_MAX_SIZE", 1048576))

    def sink_defaults(self) -> dict[str, Any]:
        """Options merged under every sink config at build time."""
        return {
            "date_format": self.date_format,
            "path": self.log_path,
            "max_size": self.max_size,
        }

    def load_sinks(self, path: Path | None = None) -> dict[str, dict[str, Any]]:
        """Read sink configs from YAML. A missing file yields no sinks."""
        return load_sinks(path or self.config_path)


def load_sinks(path: Path | str) -> dict[str, dict[str, Any]]:
    file_path = Path(path).expanduser()
    if not file_path.exists():
        return {}

    raw = yaml.safe_load(file_path.read_text()) or {}
    if not isinstance(raw, dict):
        raise InvalidConfigError(f"Sink config file must hold a mapping: {str(file_path)!r}")

    sinks = raw.get("sinks", raw)
    if not isinstance(sinks, dict):
        raise InvalidConfigError(f"'sinks' must be a mapping in {str(file_path)!r}")

    result: dict[str, dict[str, Any]] = {}
    for key, options in sinks.items():
        if not isinstance(options, dict):
            raise InvalidConfigError(f"Sink config {key!r} must be a mapping, got {options!r}")
        result[str(key)] = options
    return result
