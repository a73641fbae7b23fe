"""
objdiff - Structural diff for nested record snapshots

Computes the flat set of field-level changes between two versions of the
same record, for change logs and cache patches.
"""

__version__ = "0.1.0"

from .core.value import UNDEFINED, ValueKind
from .core.sanitize import NotDiffableError, to_diffable, validate_diffable, is_diffable
from .diff.changes import Change, ChangeSet, ChangeType
from .diff.structural_diff import StructuralDiffEngine, diff_object
from .diff.renderer import DiffRenderer

__all__ = [
    # Version
    "__version__",
    # Engine
    "StructuralDiffEngine",
    "diff_object",
    # Data models
    "Change",
    "ChangeSet",
    "ChangeType",
    "UNDEFINED",
    "ValueKind",
    # Input narrowing
    "NotDiffableError",
    "to_diffable",
    "validate_diffable",
    "is_diffable",
    # Output
    "DiffRenderer",
]
