"""
Core value model for objdiff.
"""

from .value import UNDEFINED, ValueKind, kind_of, values_equal, contains, deep_equal, member_key
from .sanitize import NotDiffableError, to_diffable, validate_diffable, is_diffable

__all__ = [
    "UNDEFINED",
    "ValueKind",
    "kind_of",
    "values_equal",
    "contains",
    "deep_equal",
    "member_key",
    "NotDiffableError",
    "to_diffable",
    "validate_diffable",
    "is_diffable",
]
