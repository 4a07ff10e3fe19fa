"""Placeholder interpolation: ``"user {id} failed"`` + data -> rendered text.

Rules:
    {name}       replaced by data["name"] when present
    {backtrace}  and the other reserved keys fall back to the context provider
    \\{name}      escaped, left verbatim (backslash included)
    anything else is left untouched, never an error

Substitution is a single regex pass over the original message with a
precomputed replacement map, so replacement text is never re-scanned.
"""

from __future__ import annotations

import dataclasses
import json
import re
from collections.abc import Mapping, Sequence
from typing import Any

from scopelog.context import RESERVED_KEYS, ContextProvider

PLACEHOLDER_RE = re.compile(r"(?<!\\)\{([\w-]+)\}")

_SCALARS = (str, int, float, bool)


def interpolate(
    message: Any,
    data: Mapping[str, Any] | Sequence[Any] | None = None,
    context: ContextProvider | None = None,
) -> str:
    """Render ``message`` against ``data`` and, for reserved keys, ``context``."""
    message = str(message)

    if "{" not in message:
        return message

    keys = dict.fromkeys(PLACEHOLDER_RE.findall(message))
    if not keys:
        return message

    values = _as_mapping(data)
    replacements: dict[str, str] = {}

    for key in keys:
        if key in values:
            replacements[key] = stringify(values[key])
        elif context is not None and key in RESERVED_KEYS:
            snapshot = context.get(key)
            if snapshot is not None:
                replacements[key] = to_json(snapshot)

    if not replacements:
        return message

    def _sub(match: re.Match[str]) -> str:
        return replacements.get(match.group(1), match.group(0))

    return PLACEHOLDER_RE.sub(_sub, message)


def stringify(value: Any) -> str:
    """Scalars via str(), everything else as unicode-preserving JSON."""
    if isinstance(value, _SCALARS):
        return str(value)
    return to_json(value)


def to_json(value: Any) -> str:
    """JSON at every depth; unencodable data (tuple keys, cycles) falls back to str()."""
    try:
        return json.dumps(value, ensure_ascii=False, default=_jsonable)
    except (TypeError, ValueError):
        return str(value)


def _jsonable(value: Any) -> Any:
    # json.dumps calls this for every object it cannot encode natively
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if hasattr(value, "to_dict") and callable(value.to_dict):
        return value.to_dict()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    return str(value)


def _as_mapping(data: Mapping[str, Any] | Sequence[Any] | None) -> Mapping[str, Any]:
    # Positional data: ["a", "b"] renders {0} and {1}
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return {str(k): v for k, v in data.items()}
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        return {str(i): v for i, v in enumerate(data)}
    raise TypeError(f"Interpolation data must be a mapping or sequence, got {type(data).__name__}")
