"""Admission: does a sink accept an event with this level and scope?

A sink filter is either None (accept everything) or a tuple of accepted
values. For scopes the empty tuple is meaningful: such a sink accepts only
events that carry no scope at all.
"""

from __future__ import annotations

from collections.abc import Iterable

from scopelog.errors import InvalidConfigError
from scopelog.levels import LEVELS

ALL = "all"
NONE = "none"

Filter = tuple[str, ...] | None


def normalize_filter(value: str | Iterable[str] | None, name: str = "filter") -> Filter:
    """Normalise a config value: None/"all" -> None, "none" -> (), str -> (str,).

    A ``levels`` filter must name known levels only.
    """
    if value is None or value == ALL:
        return None
    if value == NONE:
        return ()
    if isinstance(value, str):
        result: tuple[str, ...] = (value,)
    elif isinstance(value, Iterable):
        result = tuple(value)
    else:
        raise InvalidConfigError(
            f"Invalid {name}: {value!r}. Expected 'all', 'none', a string or a list of strings"
        )

    if name == "levels":
        unknown = [level for level in result if level not in LEVELS]
        if unknown:
            raise InvalidConfigError(
                f"Unknown levels in filter: {unknown!r}. Available: {list(LEVELS)}"
            )
    return result


def normalize_scope(scope: str | Iterable[str] | None) -> tuple[str, ...]:
    if scope is None:
        return ()
    if isinstance(scope, str):
        return (scope,)
    return tuple(scope)


def can_handle(
    levels: Filter,
    scopes: Filter,
    level: str,
    scope: str | Iterable[str] | None = None,
) -> bool:
    level_ok = levels is None or level in levels

    event_scopes = normalize_scope(scope)
    scope_ok = (
        scopes is None
        or (not event_scopes and not scopes)
        or not set(event_scopes).isdisjoint(scopes)
    )

    return level_ok and scope_ok
