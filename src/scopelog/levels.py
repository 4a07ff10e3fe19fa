"""The closed set of log levels, most to least critical.

Levels are compared by membership only; the order here is informational.
"""

from __future__ import annotations

from scopelog.errors import InvalidLevelError

LEVELS: tuple[str, ...] = (
    "emergency",
    "alert",
    "critical",
    "error",
    "warning",
    "notice",
    "info",
    "debug",
)


def is_level(level: str) -> bool:
    return level in LEVELS


def require_level(level: str) -> str:
    """Return ``level`` unchanged, or raise InvalidLevelError."""
    if level not in LEVELS:
        raise InvalidLevelError(
            f"Unknown log level: {level!r}. Available: {list(LEVELS)}"
        )
    return level
