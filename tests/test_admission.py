"""Tests for the admission predicate and config filter normalisation."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from scopelog.admission import can_handle, normalize_filter
from scopelog.errors import InvalidConfigError
from scopelog.levels import LEVELS

_levels = st.sampled_from(LEVELS)
_level_sets = st.none() | st.frozensets(_levels).map(tuple)
_labels = st.sampled_from(["audit", "billing", "db", "http", "auth"])
_scope_sets = st.none() | st.frozensets(_labels).map(tuple)
_event_scopes = st.none() | st.lists(_labels, max_size=3) | _labels


class TestNormalizeFilter:
    def test_none_means_all(self):
        assert normalize_filter(None) is None

    def test_all_keyword(self):
        assert normalize_filter("all") is None

    def test_none_keyword_is_empty(self):
        assert normalize_filter("none") == ()

    def test_single_string(self):
        assert normalize_filter("debug") == ("debug",)

    def test_iterable(self):
        assert normalize_filter(["a", "b"]) == ("a", "b")
        assert normalize_filter(()) == ()

    def test_invalid_value(self):
        with pytest.raises(InvalidConfigError):
            normalize_filter(42, "levels")

    def test_unknown_level_name_rejected(self):
        with pytest.raises(InvalidConfigError, match="eror"):
            normalize_filter(["error", "eror"], "levels")

    def test_unknown_single_level_rejected(self):
        with pytest.raises(InvalidConfigError):
            normalize_filter("warn", "levels")

    def test_level_keywords_still_accepted(self):
        assert normalize_filter("all", "levels") is None
        assert normalize_filter("none", "levels") == ()
        assert normalize_filter(list(LEVELS), "levels") == LEVELS

    def test_scopes_accept_any_label(self):
        assert normalize_filter(["eror"], "scopes") == ("eror",)


class TestLevels:
    def test_all_levels(self):
        assert all(can_handle(None, None, level) for level in LEVELS)

    def test_explicit_level_set(self):
        assert can_handle(("debug",), None, "debug")
        assert not can_handle(("debug",), None, "error")

    def test_empty_level_set_rejects_everything(self):
        assert not any(can_handle((), None, level) for level in LEVELS)


class TestScopes:
    def test_empty_scopes_accept_only_unscoped(self):
        assert can_handle(None, (), "info")
        assert can_handle(None, (), "info", [])
        assert not can_handle(None, (), "info", "audit")

    def test_all_scopes_accept_everything(self):
        assert can_handle(None, None, "info")
        assert can_handle(None, None, "info", "audit")
        assert can_handle(None, None, "info", ["x", "y"])

    def test_explicit_scopes_need_intersection(self):
        scopes = ("scoped", "test")
        assert can_handle(None, scopes, "error", "scoped")
        assert can_handle(None, scopes, "error", ["other", "test"])
        assert not can_handle(None, scopes, "error", "other")

    def test_explicit_scopes_reject_unscoped(self):
        assert not can_handle(None, ("audit",), "error")

    def test_level_and_scope_both_required(self):
        assert not can_handle(("debug",), ("audit",), "error", "audit")
        assert not can_handle(("debug",), ("audit",), "debug", "db")
        assert can_handle(("debug",), ("audit",), "debug", "audit")


class TestProperties:
    @given(_level_sets, _levels)
    def test_level_ok_iff_all_or_member(self, levels, level):
        admitted = can_handle(levels, None, level)
        assert admitted == (levels is None or level in levels)

    @given(_scope_sets, _event_scopes)
    def test_scope_ok_definition(self, scopes, scope):
        if scope is None:
            event = set()
        elif isinstance(scope, str):
            event = {scope}
        else:
            event = set(scope)

        expected = (
            scopes is None
            or (not event and not scopes)
            or bool(event & set(scopes))
        )
        assert can_handle(None, scopes, "info", scope) == expected
