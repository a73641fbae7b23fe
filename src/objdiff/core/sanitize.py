"""
Narrowing of domain objects into diffable form.

The diff engine accepts plain data only. Records loaded from a database,
dataclasses, enums and dates have to be converted before diffing, and
untyped input (parsed JSON) has to be validated. Both happen here, strictly
before the engine is called.
"""

import dataclasses
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple
from uuid import UUID

from .value import UNDEFINED, ValueKind, kind_of

Path = Tuple[str, ...]

_SCALAR_TYPES = (str, int, float, bool, type(None))


class NotDiffableError(ValueError):
    """Raised when a value falls outside the diffable grammar."""

    def __init__(self, message: str, path: Sequence[str] = ()):
        self.path: Path = tuple(path)
        location = ".".join(self.path) if self.path else "<root>"
        super().__init__(f"{location}: {message}")


def _is_scalar(value: Any) -> bool:
    return value is UNDEFINED or isinstance(value, _SCALAR_TYPES)


def _convert_key(key: Any, path: Path) -> str:
    if isinstance(key, Enum):
        key = key.value
    if not isinstance(key, str):
        raise NotDiffableError(f"key {key!r} is not a string", path)
    return key


def _convert_scalar(value: Any, path: Path) -> Any:
    if isinstance(value, Enum):
        return _convert_scalar(value.value, path)
    if _is_scalar(value):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    raise NotDiffableError(f"unsupported value of type {type(value).__name__}", path)


def _unwrap(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if callable(getattr(value, "to_dict", None)):
        return value.to_dict()
    return value


def _convert_leaf(value: Any, path: Path) -> Any:
    if isinstance(value, (set, frozenset)):
        items: List[Any] = [_convert_scalar(item, path) for item in value]
        return sorted(items, key=repr)

    if isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if isinstance(item, (dict, list, tuple, set, frozenset)):
                raise NotDiffableError("arrays may only hold scalar values", path)
            items.append(_convert_scalar(item, path))
        return items

    return _convert_scalar(value, path)


def _convert(value: Any, path: Path) -> Any:
    value = _unwrap(value)
    if not isinstance(value, dict):
        return _convert_leaf(value, path)

    root: Dict[str, Any] = {}
    pending = [(value, root, path)]
    while pending:
        source, target, base = pending.pop()
        for key, item in source.items():
            name = _convert_key(key, base)
            item = _unwrap(item)
            if isinstance(item, dict):
                target[name] = {}
                pending.append((item, target[name], base + (name,)))
            else:
                target[name] = _convert_leaf(item, base + (name,))
    return root


def to_diffable(value: Any) -> Dict[str, Any]:
    """
    Convert a domain object into a plain diffable dict.

    Args:
        value: A dict, dataclass instance or object with a to_dict() method

    Returns:
        A new dict holding only scalars, scalar lists and nested dicts

    Raises:
        NotDiffableError: If some part of the value cannot be converted
    """
    result = _convert(value, ())
    if kind_of(result) is not ValueKind.OBJECT:
        raise NotDiffableError("root value must be an object")
    return result


def _validate(value: Any, path: Path) -> None:
    pending = [(value, path)]
    while pending:
        current, base = pending.pop()
        kind = kind_of(current)
        if kind is ValueKind.OBJECT:
            for key, item in current.items():
                if not isinstance(key, str):
                    raise NotDiffableError(f"key {key!r} is not a string", base)
                pending.append((item, base + (key,)))
        elif kind is ValueKind.ARRAY:
            for item in current:
                if not _is_scalar(item):
                    raise NotDiffableError("arrays may only hold scalar values", base)
        elif not _is_scalar(current):
            raise NotDiffableError(f"unsupported value of type {type(current).__name__}", base)


def validate_diffable(value: Any) -> None:
    """
    Check that a value is a diffable object.

    Raises:
        NotDiffableError: With the path of the first offending value
    """
    if kind_of(value) is not ValueKind.OBJECT:
        raise NotDiffableError("root value must be an object")
    _validate(value, ())


def is_diffable(value: Any) -> bool:
    """Return True if validate_diffable would accept the value."""
    try:
        validate_diffable(value)
    except NotDiffableError:
        return False
    return True
