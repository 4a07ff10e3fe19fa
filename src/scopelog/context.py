"""Runtime context for the reserved interpolation keys.

The interpolator never reads process globals itself. It asks a
ContextProvider for one of the reserved keys and gets back either a
JSON-serializable snapshot or None (unavailable).

Usage:
    from scopelog.context import AmbientContext, bind_request

    registry = LogRegistry(context=AmbientContext())
    with bind_request(get=request.args, session=request.session):
        registry.error("bad request {get_vars}")
"""

from __future__ import annotations

import os
import traceback
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

RESERVED_KEYS: tuple[str, ...] = (
    "backtrace",
    "get_vars",
    "post_vars",
    "server_vars",
    "session_vars",
)

_PACKAGE_DIR = str(Path(__file__).resolve().parent) + os.sep


@runtime_checkable
class ContextProvider(Protocol):
    """Supplies snapshots for reserved keys. None means unavailable."""

    def get(self, key: str) -> Any | None: ...


@dataclass(frozen=True)
class RequestSnapshot:
    """Request state bound for the duration of a ``bind_request`` block."""

    get: Mapping[str, Any] | None = None
    post: Mapping[str, Any] | None = None
    server: Mapping[str, Any] | None = None
    session: Mapping[str, Any] | None = None


_request: ContextVar[RequestSnapshot | None] = ContextVar(
    "scopelog_request", default=None
)


@contextmanager
def bind_request(
    get: Mapping[str, Any] | None = None,
    post: Mapping[str, Any] | None = None,
    server: Mapping[str, Any] | None = None,
    session: Mapping[str, Any] | None = None,
) -> Iterator[RequestSnapshot]:
    """Bind request state to the current context (thread or task)."""
    snapshot = RequestSnapshot(get=get, post=post, server=server, session=session)
    token = _request.set(snapshot)
    try:
        yield snapshot
    finally:
        _request.reset(token)


def current_request() -> RequestSnapshot | None:
    return _request.get()


class AmbientContext:
    """Reads the call stack, bound request state and the process environment.

    - backtrace: caller frames, scopelog's own frames removed
    - get_vars / post_vars / session_vars: from bind_request(), else None
    - server_vars: bound server mapping, else os.environ
    """

    def get(self, key: str) -> Any | None:
        if key == "backtrace":
            return self._backtrace()

        request = _request.get()
        if key == "server_vars":
            if request is not None and request.server is not None:
                return dict(request.server)
            return dict(os.environ)
        if request is None:
            return None

        value = {
            "get_vars": request.get,
            "post_vars": request.post,
            "session_vars": request.session,
        }.get(key)
        return dict(value) if value is not None else None

    @staticmethod
    def _backtrace() -> list[dict[str, Any]] | None:
        frames = [
            {"file": f.filename, "line": f.lineno, "function": f.name}
            for f in reversed(traceback.extract_stack())
            if not f.filename.startswith(_PACKAGE_DIR)
        ]
        return frames or None


class MappingContext:
    """Fixed snapshot: returns ``values[key]`` or None."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> Any | None:
        return self._values.get(key)
