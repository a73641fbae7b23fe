"""
Structural diff engine for comparing nested record snapshots.

Walks two dicts key by key and reports every field that was added,
removed or modified. Lists of scalars are compared as sets and report
the individual values that were added or removed.
"""

import logging
from typing import Any, Dict, Hashable, List, Optional, Sequence, Set, Tuple

from ..core.value import ValueKind, contains, kind_of, member_key, values_equal
from .changes import Change, ChangeSet

logger = logging.getLogger(__name__)

Path = Tuple[str, ...]


class StructuralDiffEngine:
    """
    Engine for computing structural diffs between two snapshots.

    The engine holds no per-call state; one instance can be shared.

    Usage:
        engine = StructuralDiffEngine()
        changes = engine.diff(before, after)
        if not changes:
            return  # nothing to record
    """

    def diff(self, before: Dict[str, Any], after: Dict[str, Any]) -> ChangeSet:
        """
        Compute the changes that turn one snapshot into another.

        Args:
            before: Snapshot before the change (baseline)
            after: Snapshot after the change

        Returns:
            ChangeSet of atomic changes, in no particular order
        """
        for name, value in (("before", before), ("after", after)):
            if kind_of(value) is not ValueKind.OBJECT:
                raise TypeError(f"{name} must be a dict, got {type(value).__name__}")

        changes = ChangeSet(self._diff_objects(before, after))

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Computed %d change(s) across %d path(s)", len(changes), len(changes.paths()))
        return changes

    def _diff_objects(self, before: Dict[str, Any], after: Dict[str, Any]) -> List[Change]:
        """
        Diff two root dicts and every pair of dicts nested under them.

        Nested dicts are walked with an explicit stack of
        (before, after, path) entries, so depth is not bounded by the
        interpreter's recursion limit.

        Args:
            before: Dict from the baseline snapshot
            after: Dict from the new snapshot

        Returns:
            Changes with fully prefixed paths
        """
        changes: List[Change] = []
        pending: List[Tuple[Dict[str, Any], Dict[str, Any], Path]] = [(before, after, ())]

        while pending:
            prev_obj, curr_obj, path = pending.pop()

            for key, prev in prev_obj.items():
                key_path = path + (key,)

                # Membership, not truthiness: a key holding UNDEFINED is present
                if key not in curr_obj:
                    changes.append(Change.object_remove(key_path, prev))
                    continue

                curr = curr_obj[key]
                kinds = (kind_of(prev), kind_of(curr))

                if kinds == (ValueKind.ARRAY, ValueKind.ARRAY):
                    changes.extend(self._diff_arrays(prev, curr, key_path))
                elif kinds == (ValueKind.OBJECT, ValueKind.OBJECT):
                    pending.append((prev, curr, key_path))
                elif not values_equal(prev, curr):
                    changes.append(Change.object_modify(key_path, prev, curr))

            for key, curr in curr_obj.items():
                if key not in prev_obj:
                    changes.append(Change.object_add(path + (key,), curr))

        return changes

    def _diff_arrays(
        self,
        before: Sequence[Any],
        after: Sequence[Any],
        path: Path,
    ) -> List[Change]:
        """
        Diff two scalar lists as sets.

        Each distinct value is reported at most once, so duplicates
        within a list never produce duplicate changes.
        """
        changes = [Change.array_remove(path, value) for value in _missing(before, after)]
        changes.extend(Change.array_add(path, value) for value in _missing(after, before))
        return changes


def _keys(values: Sequence[Any]) -> Optional[Set[Hashable]]:
    keys = set()
    for value in values:
        key = member_key(value)
        if key is None:
            return None
        keys.add(key)
    return keys


def _missing(source: Sequence[Any], other: Sequence[Any]) -> List[Any]:
    """Distinct values of source that other does not contain."""
    other_keys = _keys(other)
    if other_keys is not None and _keys(source) is not None:
        seen: Set[Hashable] = set()
        result = []
        for value in source:
            key = member_key(value)
            if key not in other_keys and key not in seen:
                seen.add(key)
                result.append(value)
        return result

    # Values without a hashable key fall back to pairwise comparison
    result = []
    for value in source:
        if not contains(other, value) and not contains(result, value):
            result.append(value)
    return result


_default_engine = StructuralDiffEngine()


def diff_object(before: Dict[str, Any], after: Dict[str, Any]) -> ChangeSet:
    """
    Diff two snapshots with the shared default engine.

    Args:
        before: Snapshot before the change
        after: Snapshot after the change

    Returns:
        ChangeSet of atomic changes
    """
    return _default_engine.diff(before, after)
