"""Outcome code constants for merges and intersection reports.

These constants prevent stringly-typed outcome codes and ensure
client code matches on the correct values.
"""

from enum import Enum


class Policy(str, Enum):
    """Compatibility policy used when merging two schemas."""

    STRICT = "strict"  # keep a field only on exact descriptor equality
    UPCAST = "upcast"  # also keep widened fields and same-kind literal pairs


class MergeRule(str, Enum):
    """Which rule decided a shared field during a pairwise merge."""

    # Kept
    EXACT_MATCH = "EXACT_MATCH"
    WIDENED = "WIDENED"  # one side generalizes the other; the general side is kept
    UPCAST_TO_PRIMITIVE = "UPCAST_TO_PRIMITIVE"  # two same-kind literals became their primitive

    # Dropped
    INCOMPATIBLE = "INCOMPATIBLE"


class DropReason(str, Enum):
    """Why a field is absent from an intersection result."""

    NOT_SHARED = "NOT_SHARED"  # missing from at least one input schema
    INCOMPATIBLE = "INCOMPATIBLE"  # shared, but descriptors failed the policy
