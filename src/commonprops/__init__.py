"""commonprops: structural intersection of record schemas (strict and upcast)."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("commonprops")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from commonprops.api import intersect, classify_descriptor, IntersectResult, ClassifyResult
from commonprops.codes import DropReason, MergeRule, Policy
from commonprops.kernel.descriptors import (
    BaseKind,
    BooleanLiteral,
    BooleanPrimitive,
    DescriptorError,
    NumberLiteral,
    NumberPrimitive,
    Opaque,
    StringLiteral,
    StringPrimitive,
    literal,
    union,
)
from commonprops.kernel.classifier import base_kind, classify, is_upcastable
from commonprops.kernel.oracle import is_assignable, is_exact_match
from commonprops.kernel.merge import merge_strict, merge_upcast
from commonprops.kernel.fold import fold, fold_strict, fold_upcast

__all__ = [
    "__version__",
    "intersect",
    "classify_descriptor",
    "IntersectResult",
    "ClassifyResult",
    "DropReason",
    "MergeRule",
    "Policy",
    "BaseKind",
    "BooleanLiteral",
    "BooleanPrimitive",
    "DescriptorError",
    "NumberLiteral",
    "NumberPrimitive",
    "Opaque",
    "StringLiteral",
    "StringPrimitive",
    "literal",
    "union",
    "base_kind",
    "classify",
    "is_upcastable",
    "is_assignable",
    "is_exact_match",
    "merge_strict",
    "merge_upcast",
    "fold",
    "fold_strict",
    "fold_upcast",
]
