"""Rotating file sink: one file per label, rotated by size.

Layout under the configured directory:
    <label><suffix>.<extension>        active file
    <label>.<unixtime>.<extension>     rotated copies

The label is the configured ``file`` name, or the event level when unset,
so by default each level gets its own file (debug.log, error.log, ...).

Every write takes an exclusive flock for its duration. The size check,
rotation and append all happen under that one lock. Two rotations of the
same label within one second write the same rotated name and the later
copy wins; that is an accepted limitation.
"""

from __future__ import annotations

import logging
import os
import shutil
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any, ClassVar

from scopelog.errors import InvalidConfigError, InvalidPathError
from scopelog.sinks._locking import exclusive_lock
from scopelog.sinks.base import BaseSink

logger = logging.getLogger(__name__)


class FileSink(BaseSink):
    """Append formatted lines to size-rotated files."""

    defaults: ClassVar[dict[str, Any]] = {
        "path": "/var/log/",
        "file": None,
        "suffix": None,
        "extension": "log",
        "max_size": 1048576,
        "mask": None,
        "newline": "\n",
    }

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        super().__init__(options)
        self._path = Path(self._config["path"]).expanduser().resolve()
        self._mask = _parse_mask(self._config["mask"])
        self._config["max_size"] = _parse_size(self._config["max_size"])

    @property
    def path(self) -> Path:
        return self._path

    def file_path(self, level: str) -> Path:
        """Active file for an event at ``level``."""
        label = self._label(level)
        extension = self._config["extension"]
        name = label + (self._config["suffix"] or "") + (f".{extension}" if extension else "")
        return self._path / name

    def rotated_path(self, level: str, timestamp: int | None = None) -> Path:
        label = self._label(level)
        stamp = int(time.time()) if timestamp is None else timestamp
        extension = self._config["extension"]
        name = f"{label}.{stamp}" + (f".{extension}" if extension else "")
        return self._path / name

    def handle(self, level: str, message: str) -> None:
        target = self.file_path(level)
        self._ensure_directory()

        created = not target.exists()
        with open(target, "a", encoding="utf-8") as fh:
            if created and self._mask is not None:
                os.chmod(target, self._mask)

            with exclusive_lock(fh):
                if os.fstat(fh.fileno()).st_size >= self._config["max_size"]:
                    self._rotate(target, level)
                    fh.truncate(0)

                fh.write(self.format(level, message) + self._config["newline"])
                fh.flush()

    def _label(self, level: str) -> str:
        return self._config["file"] or level

    def _ensure_directory(self) -> None:
        try:
            self._path.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise InvalidPathError(f"Cannot create log directory: {str(self._path)!r}") from err

    def _rotate(self, target: Path, level: str) -> None:
        rotated = self.rotated_path(level)
        shutil.copyfile(target, rotated)
        logger.debug("Rotated %s to %s", target, rotated)


def _parse_mask(mask: int | str | None) -> int | None:
    if mask is None:
        return None
    if isinstance(mask, int):
        return mask
    try:
        return int(mask, 8)
    except (TypeError, ValueError) as err:
        raise InvalidConfigError(f"Invalid file mask: {mask!r}. Expected octal, e.g. '0640'") from err


def _parse_size(max_size: int | str) -> int:
    if isinstance(max_size, bool):
        raise InvalidConfigError(f"Invalid max_size: {max_size!r}. Expected a byte count")
    try:
        size = int(max_size)
    except (TypeError, ValueError) as err:
        raise InvalidConfigError(f"Invalid max_size: {max_size!r}. Expected a byte count") from err
    if size < 0:
        raise InvalidConfigError(f"Invalid max_size: {max_size!r}. Must not be negative")
    return size
