"""Typed attribute values: kinds, equality and textual encoding."""
from decimal import Decimal
from enum import Enum
from typing import Mapping, Sequence
import json
import math

from metricdatatest.metricdata import AttributeValue, KeyValue


class ValueType(Enum):
    """The closed set of attribute value kinds."""
    BOOL = "BOOL"
    INT64 = "INT64"
    FLOAT64 = "FLOAT64"
    STRING = "STRING"
    BOOLSLICE = "BOOLSLICE"
    INT64SLICE = "INT64SLICE"
    FLOAT64SLICE = "FLOAT64SLICE"
    STRINGSLICE = "STRINGSLICE"


_SCALAR_TYPES = (
    (bool, ValueType.BOOL),
    (int, ValueType.INT64),
    (float, ValueType.FLOAT64),
    (str, ValueType.STRING),
)

_SLICE_TYPES = {
    ValueType.BOOL: ValueType.BOOLSLICE,
    ValueType.INT64: ValueType.INT64SLICE,
    ValueType.FLOAT64: ValueType.FLOAT64SLICE,
    ValueType.STRING: ValueType.STRINGSLICE,
}


def _scalar_type(value) -> ValueType:
    # bool is checked before int: bool is a subclass of int.
    for python_type, value_type_ in _SCALAR_TYPES:
        if isinstance(value, python_type):
            return value_type_
    raise TypeError(f"unknown attribute value type: {type(value).__name__}")


def value_type(value: AttributeValue) -> ValueType:
    """
    Classify an attribute value into one of the eight value kinds.

    Sequences must be homogeneous lists or tuples. An empty sequence is
    classified as a string slice.

    Raises:
        TypeError: the value is not one of the supported kinds.
    """
    if isinstance(value, (list, tuple)):
        if not value:
            return ValueType.STRINGSLICE
        element_types = {_scalar_type(v) for v in value}
        if len(element_types) != 1:
            raise TypeError(
                f"unknown attribute value type: mixed sequence of {sorted(t.value for t in element_types)}"
            )
        return _SLICE_TYPES[element_types.pop()]
    return _scalar_type(value)


def equal_values(a: AttributeValue, b: AttributeValue) -> bool:
    """Compare two attribute values, kind first, then value."""
    kind = value_type(a)
    if kind != value_type(b):
        return False
    if kind in _SLICE_TYPES.values():
        return tuple(a) == tuple(b)
    return a == b


def equal_key_values(a: Sequence[KeyValue], b: Sequence[KeyValue]) -> bool:
    """Ordered, element-wise comparison of two attribute lists."""
    if len(a) != len(b):
        return False
    for kv_a, kv_b in zip(a, b):
        if kv_a.key != kv_b.key:
            return False
        if not equal_values(kv_a.value, kv_b.value):
            return False
    return True


def equal_attributes(a: Mapping[str, AttributeValue], b: Mapping[str, AttributeValue]) -> bool:
    """Order-independent comparison of two attribute sets."""
    if a.keys() != b.keys():
        return False
    return all(equal_values(a[key], b[key]) for key in a)


def _format_exponent(digits, exponent: int, negative: bool, width: int) -> str:
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(d) for d in digits[1:])
    sign = "-" if exponent < 0 else "+"
    return f"{'-' if negative else ''}{mantissa}e{sign}{abs(exponent):0{width}d}"


def _format_float(value: float, in_slice: bool = False) -> str:
    """
    Shortest text that reads back as the same float.

    Scalars switch to exponent form below 1e-4 or from 1e6 on (``1e+06``);
    slice elements do so below 1e-6 or from 1e21 on (``1e-7``), and keep
    whole numbers without a fractional part (``100``).
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    number = Decimal(repr(value)).normalize()
    negative, digits, _ = number.as_tuple()
    if in_slice:
        use_exponent = value != 0 and not 1e-6 <= abs(value) < 1e21
    else:
        use_exponent = value != 0 and not -4 <= number.adjusted() < 6
    if not use_exponent:
        return format(number, "f")
    exponent = number.adjusted()
    return _format_exponent(digits, exponent, negative, 1 if in_slice and exponent < 0 else 2)


def _emit_element(value) -> str:
    if isinstance(value, float):
        return _format_float(value, in_slice=True)
    return json.dumps(value, ensure_ascii=False)


def emit(value: AttributeValue) -> str:
    """Render an attribute value as text."""
    kind = value_type(value)
    if kind == ValueType.STRING:
        return value
    if kind == ValueType.FLOAT64:
        return _format_float(value)
    if kind in _SLICE_TYPES.values():
        return "[" + ",".join(_emit_element(v) for v in value) + "]"
    return json.dumps(value)


def _escape(text: str) -> str:
    for char in ("\\", ",", "="):
        text = text.replace(char, "\\" + char)
    return text


def encode(attributes: Mapping[str, AttributeValue]) -> str:
    """Encode an attribute set as ``key=value`` pairs sorted by key."""
    return ",".join(
        f"{_escape(key)}={_escape(emit(attributes[key]))}"
        for key in sorted(attributes)
    )
