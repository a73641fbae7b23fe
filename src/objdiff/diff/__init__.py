"""
Diff engine for comparing record snapshots.
"""

from .changes import Change, ChangeSet, ChangeType
from .structural_diff import StructuralDiffEngine, diff_object
from .renderer import DiffRenderer

__all__ = [
    "StructuralDiffEngine",
    "diff_object",
    "Change",
    "ChangeSet",
    "ChangeType",
    "DiffRenderer",
]
