"""
Value model for diffable data.

A diffable value is a scalar, a flat list of scalars, or a dict mapping
string keys to diffable values. Lists are compared as unordered sets.
"""

import math
from enum import Enum
from typing import Any, Hashable, Iterable, Optional


class _Undefined:
    """Marker for a key that is present but holds no value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


class ValueKind(Enum):
    """Shapes a diffable value can take."""
    SCALAR = "scalar"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> ValueKind:
    """Classify a value as scalar, array or object."""
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    return ValueKind.SCALAR


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def values_equal(a: Any, b: Any) -> bool:
    """
    Strict equality for diffable scalars.

    Booleans never equal numbers, NaN equals NaN and UNDEFINED only
    equals itself. Values of different kinds are never equal.
    """
    if a is b:
        return True
    if kind_of(a) is not ValueKind.SCALAR or kind_of(b) is not ValueKind.SCALAR:
        return False
    if a is UNDEFINED or b is UNDEFINED:
        return False
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if _is_nan(a) and _is_nan(b):
        return True
    return a == b


def contains(array: Iterable[Any], value: Any) -> bool:
    """Check membership of a scalar in an array using values_equal."""
    return any(values_equal(item, value) for item in array)


def member_key(value: Any) -> Optional[Hashable]:
    """
    Hashable key that agrees with values_equal for built-in scalars.

    Returns None for values without such a key, which callers must then
    compare with values_equal.
    """
    if value is UNDEFINED:
        return ("undefined",)
    if value is None:
        return ("null",)
    if isinstance(value, bool):
        return ("bool", value)
    if _is_nan(value):
        return ("nan",)
    if isinstance(value, (int, float)):
        return ("number", value)
    if isinstance(value, str):
        return ("string", value)
    return None


def deep_equal(a: Any, b: Any) -> bool:
    """
    Structural equality with values_equal at the leaves.

    Dicts are equal when they hold the same keys with deep-equal values,
    lists and tuples when they hold deep-equal items in the same order.
    Works on any nesting depth.
    """
    pending = [(a, b)]
    while pending:
        left, right = pending.pop()
        if left is right:
            continue
        kind = kind_of(left)
        if kind is not kind_of(right):
            return False
        if kind is ValueKind.OBJECT:
            if left.keys() != right.keys():
                return False
            pending.extend((left[key], right[key]) for key in left)
        elif kind is ValueKind.ARRAY:
            if len(left) != len(right):
                return False
            pending.extend(zip(left, right))
        elif not values_equal(left, right):
            return False
    return True
