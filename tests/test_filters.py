"""
Tests for content/filters.py
Logic testing: Decision/Branch coverage
"""
from collections import OrderedDict

import pytest

from getpro.content.encoder import FieldQueue
from getpro.content.filters import (
    default_array_filter,
    default_filter,
    default_object_filter,
    null_filter,
    select_filter,
    stringify,
    value_kind,
)
from getpro.errors import NestedDataStructureError
from getpro.types import FieldPair


class TestValueKind:
    """Tests for value_kind."""

    @pytest.mark.parametrize("value,kind", [
        (None, "null"),
        (True, "boolean"),
        (0, "number"),
        (1.5, "number"),
        ("x", "string"),
        (b"x", "bytes"),
        ([1], "array"),
        ((1,), "array"),
        ({"a": 1}, "object"),
        (OrderedDict(a=1), "object"),
        (object(), "other"),
    ])
    def test_kinds(self, value, kind):
        assert value_kind(value) == kind


class TestSelectFilter:
    """Tests for select_filter."""

    # Decision: defaults per kind
    def test_defaults(self):
        assert select_filter("array") is default_array_filter
        assert select_filter("object") is default_object_filter
        assert select_filter("null") is null_filter
        assert select_filter("string") is default_filter
        assert select_filter("other") is default_filter

    # Decision: caller filter wins
    def test_custom_overrides(self):
        custom = lambda pair, queue: pair  # noqa: E731

        assert select_filter("object", {"object": custom}) is custom
        assert select_filter("array", {"object": custom}) is default_array_filter


class TestDefaultFilters:
    """Tests for the default filters."""

    # Path: scalar stringification
    def test_stringify(self):
        assert stringify(True) == "true"
        assert stringify(False) == "false"
        assert stringify(12) == "12"
        assert stringify(bytearray(b"ab")) == b"ab"

    # Path: default filter keeps the key
    def test_default_filter(self):
        assert default_filter(FieldPair("k", 3), FieldQueue()) == FieldPair("k", "3")

    # Error Path: object filter always raises
    def test_object_filter(self):
        with pytest.raises(NestedDataStructureError):
            default_object_filter(FieldPair("k", {}), FieldQueue())

    # Path: array filter expands in place
    def test_array_filter(self):
        queue = FieldQueue([FieldPair("next", 0)])

        assert default_array_filter(FieldPair("k", [1, 2]), queue) is None
        assert [queue.pop() for _ in range(len(queue))] == [
            FieldPair("k", 1),
            FieldPair("k", 2),
            FieldPair("next", 0),
        ]

    # Boundary: empty array yields nothing
    def test_empty_array(self):
        queue = FieldQueue()

        assert default_array_filter(FieldPair("k", []), queue) is None
        assert len(queue) == 0
