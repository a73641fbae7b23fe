"""
Change records produced by the structural diff engine.
"""

from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from ..core.value import UNDEFINED, deep_equal, member_key

Path = Tuple[str, ...]


class ChangeType(Enum):
    """Kinds of atomic changes between two snapshots."""
    OBJECT_ADD = "obj_add"
    OBJECT_REMOVE = "obj_del"
    OBJECT_MODIFY = "obj_mod"
    ARRAY_ADD = "arr_add"
    ARRAY_REMOVE = "arr_del"


# Payload fields carried by each change type
PAYLOAD_FIELDS: Dict[ChangeType, Tuple[str, ...]] = {
    ChangeType.OBJECT_ADD: ("curr",),
    ChangeType.OBJECT_REMOVE: ("prev",),
    ChangeType.OBJECT_MODIFY: ("prev", "curr"),
    ChangeType.ARRAY_ADD: ("value",),
    ChangeType.ARRAY_REMOVE: ("value",),
}


@dataclass(frozen=True, eq=False)
class Change:
    """
    A single atomic difference between two snapshots.

    The path lists the dict keys from the root to the differing field.
    Payload fields that do not apply to the change type hold UNDEFINED.
    """
    path: Path
    change_type: ChangeType
    prev: Any = UNDEFINED
    curr: Any = UNDEFINED
    value: Any = UNDEFINED

    def __post_init__(self):
        object.__setattr__(self, "path", tuple(self.path))
        if not self.path:
            raise ValueError("Change path must not be empty")

    @classmethod
    def object_add(cls, path: Sequence[str], curr: Any) -> "Change":
        return cls(path=tuple(path), change_type=ChangeType.OBJECT_ADD, curr=curr)

    @classmethod
    def object_remove(cls, path: Sequence[str], prev: Any) -> "Change":
        return cls(path=tuple(path), change_type=ChangeType.OBJECT_REMOVE, prev=prev)

    @classmethod
    def object_modify(cls, path: Sequence[str], prev: Any, curr: Any) -> "Change":
        return cls(path=tuple(path), change_type=ChangeType.OBJECT_MODIFY, prev=prev, curr=curr)

    @classmethod
    def array_add(cls, path: Sequence[str], value: Any) -> "Change":
        return cls(path=tuple(path), change_type=ChangeType.ARRAY_ADD, value=value)

    @classmethod
    def array_remove(cls, path: Sequence[str], value: Any) -> "Change":
        return cls(path=tuple(path), change_type=ChangeType.ARRAY_REMOVE, value=value)

    @property
    def dotted_path(self) -> str:
        """Path joined with dots, for display."""
        return ".".join(self.path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Change):
            return NotImplemented
        return (
            self.path == other.path
            and self.change_type == other.change_type
            and deep_equal(self.prev, other.prev)
            and deep_equal(self.curr, other.curr)
            and deep_equal(self.value, other.value)
        )

    def __hash__(self) -> int:
        return hash((self.path, self.change_type))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary. UNDEFINED payloads are left out."""
        data: Dict[str, Any] = {
            "path": list(self.path),
            "type": self.change_type.value,
        }
        for name in PAYLOAD_FIELDS[self.change_type]:
            payload = getattr(self, name)
            if payload is not UNDEFINED:
                data[name] = payload
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Change":
        """Create from dictionary."""
        change_type = ChangeType(data["type"])
        payload = {
            name: data.get(name, UNDEFINED)
            for name in PAYLOAD_FIELDS[change_type]
        }
        return cls(path=tuple(data["path"]), change_type=change_type, **payload)


def _bucket_key(change: Change) -> Tuple[Path, ChangeType, Any]:
    # Array changes at one path differ only by value, so split on it too
    return change.path, change.change_type, member_key(change.value)


def _same_changes(a: Sequence[Change], b: Sequence[Change]) -> bool:
    """Multiset comparison of two change sequences."""
    if len(a) != len(b):
        return False
    remaining: Dict[Tuple[Path, ChangeType, Any], List[Change]] = {}
    for other in b:
        if not isinstance(other, Change):
            return False
        remaining.setdefault(_bucket_key(other), []).append(other)
    for change in a:
        bucket = remaining.get(_bucket_key(change), [])
        for index, other in enumerate(bucket):
            if change == other:
                del bucket[index]
                break
        else:
            return False
    return True


class ChangeSet(SequenceABC):
    """
    Immutable, unordered collection of changes.

    Supports indexing and iteration like a tuple, but equality ignores
    element order. Callers must not rely on the order of elements.
    """

    __slots__ = ("_changes",)

    def __init__(self, changes: Iterable[Change] = ()):
        self._changes: Tuple[Change, ...] = tuple(changes)

    def __getitem__(self, index: Union[int, slice]) -> Union[Change, "ChangeSet"]:
        if isinstance(index, slice):
            return ChangeSet(self._changes[index])
        return self._changes[index]

    def __len__(self) -> int:
        return len(self._changes)

    def __iter__(self) -> Iterator[Change]:
        return iter(self._changes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ChangeSet):
            return _same_changes(self._changes, other._changes)
        if isinstance(other, (list, tuple)):
            return _same_changes(self._changes, other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ChangeSet({list(self._changes)!r})"

    def paths(self) -> List[Path]:
        """Distinct paths touched by the changes, in first-seen order."""
        seen: Dict[Path, None] = {}
        for change in self._changes:
            seen.setdefault(change.path, None)
        return list(seen)

    def by_path(self) -> Dict[Path, List[Change]]:
        """Group changes per path, e.g. to build per-field patches."""
        groups: Dict[Path, List[Change]] = {}
        for change in self._changes:
            groups.setdefault(change.path, []).append(change)
        return groups

    def of_type(self, *change_types: ChangeType) -> "ChangeSet":
        """Changes whose type is one of the given types."""
        return ChangeSet(c for c in self._changes if c.change_type in change_types)

    def find(self, path: Sequence[str]) -> List[Change]:
        """All changes at exactly the given path."""
        target = tuple(path)
        return [c for c in self._changes if c.path == target]

    def summary(self) -> Dict[str, int]:
        """Number of changes per change type."""
        counts = {change_type.value: 0 for change_type in ChangeType}
        for change in self._changes:
            counts[change.change_type.value] += 1
        return counts

    def to_list(self) -> List[Dict[str, Any]]:
        """Convert to a list of dictionaries."""
        return [change.to_dict() for change in self._changes]

    @classmethod
    def from_list(cls, data: Optional[Iterable[Dict[str, Any]]]) -> "ChangeSet":
        """Create from a list of dictionaries."""
        return cls(Change.from_dict(item) for item in data or ())
