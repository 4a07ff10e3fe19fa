"""Error taxonomy for scopelog.

Every error derives from LogError so callers can catch the whole family.
All are raised synchronously by the call that detects the problem.
"""

from __future__ import annotations


class LogError(Exception):
    """Base class for scopelog errors."""


class ConfigExistsError(LogError):
    """A sink config is already stored under this key. Unload it first."""


class InvalidConfigError(LogError, ValueError):
    """A sink config or setting is malformed."""


class InvalidHandlerError(LogError):
    """The config names no sink type, or one that is not registered."""


class InvalidLevelError(LogError, ValueError):
    """The level is not one of the eight known severities."""


class InvalidPathError(LogError, OSError):
    """A file sink's directory cannot be created or resolved."""
