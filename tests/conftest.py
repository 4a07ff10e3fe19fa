"""Shared fixtures: sink type table isolation and a populated registry."""

from __future__ import annotations

import pytest

from scopelog.context import MappingContext
from scopelog.levels import LEVELS
from scopelog.registry import LogRegistry
from scopelog.sinks import reset_sink_types


@pytest.fixture(autouse=True)
def _reset_sink_types():
    """Keep register_sink_type() calls from leaking between tests."""
    reset_sink_types()
    yield
    reset_sink_types()


@pytest.fixture()
def memory_registry() -> LogRegistry:
    """default (all levels, unscoped), scoped (two scopes), all (unscoped)."""
    return LogRegistry(
        {
            "default": {"type": "memory", "levels": list(LEVELS)},
            "scoped": {"type": "memory", "scopes": ["scoped", "test"]},
            "all": {"type": "memory"},
        },
        context=MappingContext(),
    )
