"""Tests for recursive record merging."""

from __future__ import annotations

from globfrontmatter.utils.merge import deep_merge, strip_blocked_keys


class TestDeepMerge:
    """Test deep_merge function."""

    def test_merge_flat_records(self) -> None:
        """Should combine disjoint keys."""
        assert deep_merge({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}

    def test_overlay_scalar_wins(self) -> None:
        """Should replace scalar values with the overlay's."""
        assert deep_merge({"a": 1}, {"a": 2}) == {"a": 2}

    def test_nested_records_merge(self) -> None:
        """Should merge nested records key by key."""
        base = {"sidebar": {"order": 1, "label": "Guide"}}
        overlay = {"sidebar": {"order": 5}}

        assert deep_merge(base, overlay) == {"sidebar": {"order": 5, "label": "Guide"}}

    def test_lists_are_replaced(self) -> None:
        """Should replace lists wholesale instead of concatenating."""
        assert deep_merge({"tags": ["a"]}, {"tags": ["b", "c"]}) == {"tags": ["b", "c"]}

    def test_explicit_none_overwrites(self) -> None:
        """Should let an explicit None in the overlay overwrite a value."""
        assert deep_merge({"a": 1}, {"a": None}) == {"a": None}

    def test_type_mismatch_replaces(self) -> None:
        """Should replace a record with a scalar and vice versa."""
        assert deep_merge({"a": {"b": 1}}, {"a": "flat"}) == {"a": "flat"}
        assert deep_merge({"a": "flat"}, {"a": {"b": 1}}) == {"a": {"b": 1}}

    def test_inputs_not_mutated(self) -> None:
        """Should leave both inputs untouched."""
        base = {"sidebar": {"order": 1}}
        overlay = {"sidebar": {"label": "X"}}

        deep_merge(base, overlay)

        assert base == {"sidebar": {"order": 1}}
        assert overlay == {"sidebar": {"label": "X"}}

    def test_empty_records(self) -> None:
        """Should handle empty inputs on either side."""
        assert deep_merge({}, {"a": 1}) == {"a": 1}
        assert deep_merge({"a": 1}, {}) == {"a": 1}

    def test_blocked_keys_skipped(self) -> None:
        """Should never copy __proto__ or constructor from the overlay."""
        result = deep_merge({}, {"__proto__": {"polluted": True}, "constructor": "bad"})

        assert result == {}
        assert not hasattr({}, "polluted")

    def test_blocked_keys_skipped_when_nested(self) -> None:
        """Should drop blocked keys at every depth."""
        result = deep_merge({"a": {"b": 1}}, {"a": {"__proto__": {"x": 1}, "c": 2}})

        assert result == {"a": {"b": 1, "c": 2}}

    def test_blocked_keys_dropped_in_new_nested_record(self) -> None:
        """Should filter a nested overlay record that base does not have yet."""
        overlay = {"a": {"__proto__": {"x": 1}, "constructor": 2, "c": 3}}

        assert deep_merge({}, overlay) == {"a": {"c": 3}}

    def test_blocked_keys_dropped_from_base(self) -> None:
        """Should not carry blocked keys over from the base record either."""
        base = {"constructor": "bad", "nested": {"__proto__": {"x": 1}, "keep": True}}

        assert deep_merge(base, {"b": 1}) == {"nested": {"keep": True}, "b": 1}

    def test_overlay_record_replacing_scalar_is_copied(self) -> None:
        overlay = {"a": {"b": [1]}}

        result = deep_merge({"a": "flat"}, overlay)
        result["a"]["c"] = 2

        assert overlay == {"a": {"b": [1]}}

    def test_merge_is_idempotent(self) -> None:
        """Merging the same overlay twice should change nothing."""
        base = {"a": 1, "nested": {"x": 1, "y": [1, 2]}}
        overlay = {"b": 2, "nested": {"y": [3], "z": None}}

        once = deep_merge(base, overlay)

        assert deep_merge(once, overlay) == once


class TestStripBlockedKeys:
    """Test strip_blocked_keys function."""

    def test_strips_at_every_depth(self) -> None:
        record = {"__proto__": 1, "a": {"constructor": 2, "b": {"__proto__": 3, "c": 4}}}

        assert strip_blocked_keys(record) == {"a": {"b": {"c": 4}}}

    def test_input_not_mutated(self) -> None:
        record = {"a": {"constructor": 1}}

        strip_blocked_keys(record)

        assert record == {"a": {"constructor": 1}}
