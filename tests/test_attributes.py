"""Tests for typed attribute values."""
import pytest

from metricdatatest.attributes import (
    ValueType,
    emit,
    encode,
    equal_attributes,
    equal_key_values,
    equal_values,
    value_type,
)
from metricdatatest.metricdata import KeyValue


@pytest.mark.parametrize("value,expected", [
    (True, ValueType.BOOL),
    (3, ValueType.INT64),
    (3.5, ValueType.FLOAT64),
    ("GET", ValueType.STRING),
    ([True, False], ValueType.BOOLSLICE),
    ((1, 2), ValueType.INT64SLICE),
    ([1.5], ValueType.FLOAT64SLICE),
    (("a", "b"), ValueType.STRINGSLICE),
    ((), ValueType.STRINGSLICE),
])
def test_value_type(value, expected):
    assert value_type(value) == expected


@pytest.mark.parametrize("value", [None, {"a": 1}, b"raw", [1, "a"], [1, True]])
def test_value_type_rejects_unknown_kinds(value):
    with pytest.raises(TypeError, match="unknown attribute value type"):
        value_type(value)


def test_equal_values_compares_kind_first():
    """Python treats 1, 1.0 and True as equal; attribute values do not."""
    assert not equal_values(1, True)
    assert not equal_values(1, 1.0)
    assert not equal_values([1], [1.0])
    assert equal_values(1, 1)
    assert equal_values([1, 2], (1, 2))


def test_equal_key_values_is_ordered():
    a = [KeyValue("user", "alice"), KeyValue("retry", 2)]
    assert equal_key_values(a, list(a))
    assert not equal_key_values(a, list(reversed(a)))
    assert not equal_key_values(a, a[:1])
    assert not equal_key_values(a, [KeyValue("user", "alice"), KeyValue("retry", 2.0)])


def test_equal_key_values_unknown_kind_raises():
    with pytest.raises(TypeError):
        equal_key_values([KeyValue("x", None)], [KeyValue("x", None)])


def test_equal_attributes_is_unordered():
    assert equal_attributes({"a": 1, "b": "x"}, {"b": "x", "a": 1})
    assert not equal_attributes({"a": 1}, {"a": 1, "b": "x"})
    assert not equal_attributes({"ok": 1}, {"ok": True})


@pytest.mark.parametrize("value,expected", [
    ("GET", "GET"),
    (True, "true"),
    (5, "5"),
    (1.5, "1.5"),
    (100.0, "100"),
    (-0.25, "-0.25"),
    (0.0001, "0.0001"),
    (0.00001, "1e-05"),
    (123456.0, "123456"),
    (1234567.0, "1.234567e+06"),
    (float("inf"), "+Inf"),
    (["a", "b"], '["a","b"]'),
    (("é",), '["é"]'),
    ((1, 2), "[1,2]"),
    ([True, False], "[true,false]"),
    ([100.0, 0.5], "[100,0.5]"),
    ([1e-7, 1e21, 1234567.0], "[1e-7,1e+21,1234567]"),
])
def test_emit(value, expected):
    assert emit(value) == expected


def test_encode_sorts_keys():
    assert encode({"method": "GET", "code": 200}) == "code=200,method=GET"


def test_encode_escapes_separators():
    assert encode({"k": "a,b=c"}) == "k=a\\,b\\=c"


def test_encode_empty():
    assert encode({}) == ""
