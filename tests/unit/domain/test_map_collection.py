"""Unit tests for NativeMapCollection key identity."""

import json

import pytest

from kvcollections.core.exceptions import InvalidKeyError
from kvcollections.domain import NativeMapCollection, ObjectCollection


class Token:
    """Hashable by identity."""


class TestNativeMapKeys:
    """Keys keep their type and identity."""

    def test_no_coercion(self):
        col = NativeMapCollection([[1, "x"], [2, "y"]])
        assert col.get(1) == "x"
        assert col.get("1") is None
        assert col.has("1") is False

    def test_int_and_string_are_distinct(self):
        col = NativeMapCollection().set(1, "int").set("1", "str")
        assert col.size == 2
        assert col.keys == [1, "1"]

    def test_object_keys_by_identity(self):
        first, second = Token(), Token()
        col = NativeMapCollection().set(first, "a").set(second, "b")
        assert col.get(first) == "a"
        assert col.get(second) == "b"
        assert col.get(Token()) is None

    def test_tuple_keys(self):
        col = NativeMapCollection().set((1, 2), "pair")
        assert col.get((1, 2)) == "pair"
        assert col.first_key() == (1, 2)

    def test_unhashable_key_rejected(self):
        col = NativeMapCollection()
        with pytest.raises(InvalidKeyError):
            col.set([1, 2], "list")
        with pytest.raises(TypeError):
            col.set({"a": 1}, "dict")

    def test_none_key_is_a_real_key(self):
        col = NativeMapCollection().set(None, "nothing").set("a", 1)
        assert col.has(None) is True
        assert col.first_key() is None
        assert col.delete_first() is col
        assert col.keys == ["a"]

    def test_seed_from_object_collection(self):
        col = NativeMapCollection(ObjectCollection([[1, "x"]]))
        assert col.keys == ["1"]

    def test_sort_keys_mixed_types(self):
        col = NativeMapCollection([[1, "a"], ["b", "c"], [None, "d"]])
        assert col.sort_keys() == [1, None, "b"]
        assert col.keys == [1, "b", None]

    def test_filter_keeps_key_types(self):
        col = NativeMapCollection([[1, "a"], [2, "b"], [3, "c"]])
        assert col.filter(lambda v, k: k > 1).keys == [2, 3]


class TestNativeMapJson:

    def test_to_json_flattens_keys(self):
        col = NativeMapCollection([[1, "one"], [(1, 2), "pair"], ["s", "str"]])
        assert json.loads(col.to_json()) == {"1": "one", "(1, 2)": "pair", "s": "str"}

    def test_to_json_flatten_collision_later_wins(self):
        col = NativeMapCollection([[1, "int"], ["1", "str"]])
        assert json.loads(col.to_json()) == {"1": "str"}

    def test_repr_marks_map(self):
        assert repr(NativeMapCollection([[1, "a"]])) == "NativeMapCollection(1) [Map] {1: 'a'}"
