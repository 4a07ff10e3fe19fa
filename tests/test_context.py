"""Tests for reserved-key context providers."""

from __future__ import annotations

import os

from scopelog.context import (
    RESERVED_KEYS,
    AmbientContext,
    ContextProvider,
    MappingContext,
    bind_request,
    current_request,
)
from scopelog.interpolate import interpolate
from scopelog.registry import LogRegistry


class TestMappingContext:
    def test_returns_values(self):
        ctx = MappingContext({"get_vars": {"a": 1}})
        assert ctx.get("get_vars") == {"a": 1}
        assert ctx.get("post_vars") is None

    def test_is_a_provider(self):
        assert isinstance(MappingContext(), ContextProvider)
        assert isinstance(AmbientContext(), ContextProvider)


class TestAmbientContext:
    def test_reserved_keys(self):
        assert RESERVED_KEYS == ("backtrace", "get_vars", "post_vars", "server_vars", "session_vars")

    def test_request_vars_unavailable_when_unbound(self):
        ctx = AmbientContext()
        assert current_request() is None
        assert ctx.get("get_vars") is None
        assert ctx.get("post_vars") is None
        assert ctx.get("session_vars") is None

    def test_server_vars_default_to_environment(self, monkeypatch):
        monkeypatch.setenv("SCOPELOG_TEST_MARKER", "yes")
        assert AmbientContext().get("server_vars")["SCOPELOG_TEST_MARKER"] == "yes"
        assert AmbientContext().get("server_vars") == dict(os.environ)

    def test_bound_request(self):
        ctx = AmbientContext()
        with bind_request(get={"q": "x"}, post={"p": 1}, session={"uid": 9}, server={"host": "h"}):
            assert ctx.get("get_vars") == {"q": "x"}
            assert ctx.get("post_vars") == {"p": 1}
            assert ctx.get("session_vars") == {"uid": 9}
            assert ctx.get("server_vars") == {"host": "h"}
        assert ctx.get("get_vars") is None

    def test_partial_binding(self):
        with bind_request(get={"q": "x"}):
            assert AmbientContext().get("post_vars") is None
            assert AmbientContext().get("server_vars") == dict(os.environ)

    def test_nested_binding_restores_outer(self):
        with bind_request(get={"outer": 1}):
            with bind_request(get={"inner": 2}):
                assert AmbientContext().get("get_vars") == {"inner": 2}
            assert AmbientContext().get("get_vars") == {"outer": 1}

    def test_backtrace_contains_caller(self):
        frames = AmbientContext().get("backtrace")
        assert frames
        assert frames[0]["function"] == "test_backtrace_contains_caller"
        assert {"file", "line", "function"} <= set(frames[0])

    def test_backtrace_excludes_package_frames(self):
        registry = LogRegistry({"m": {"type": "memory"}})
        registry.info("{backtrace}")
        line = registry.use("m").read()[0]
        assert "test_backtrace_excludes_package_frames" in line
        assert "registry.py" not in line
        assert "interpolate.py" not in line

    def test_unknown_key(self):
        assert AmbientContext().get("nope") is None


class TestInterpolationWithAmbient:
    def test_get_vars_rendered(self):
        with bind_request(get={"page": "2"}):
            assert interpolate("{get_vars}", context=AmbientContext()) == '{"page": "2"}'

    def test_unbound_left_verbatim(self):
        assert interpolate("{session_vars}", context=AmbientContext()) == "{session_vars}"
