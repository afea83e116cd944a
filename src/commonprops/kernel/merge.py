"""Pairwise schema merge under the strict and upcast policies."""

from dataclasses import dataclass
from typing import Dict, Optional

from commonprops.codes import MergeRule, Policy

from .classifier import base_kind, is_upcastable, primitive_for
from .descriptors import DescriptorModel, Schema
from .oracle import is_assignable


@dataclass(frozen=True)
class FieldDecision:
    """Outcome of comparing one shared field."""
    rule: MergeRule
    kept: Optional[DescriptorModel] = None  # None iff rule is INCOMPATIBLE

    @property
    def is_kept(self) -> bool:
        return self.kept is not None


_DROP = FieldDecision(rule=MergeRule.INCOMPATIBLE)


def decide_field(a: DescriptorModel, b: DescriptorModel, policy: Policy) -> FieldDecision:
    """Decide whether a shared field survives, and with which descriptor.

    Strict keeps exact matches only. Upcast evaluates in order:
    1. exact match -> a
    2. a assignable to b only -> b (the more general side)
    3. b assignable to a only -> a
    4. both literals of the same base kind -> that primitive
    5. otherwise dropped

    The result does not depend on argument order.
    """
    a_to_b = is_assignable(a, b)
    b_to_a = is_assignable(b, a)

    if a_to_b and b_to_a:
        return FieldDecision(rule=MergeRule.EXACT_MATCH, kept=a)
    if Policy(policy) is Policy.STRICT:
        return _DROP

    if a_to_b:
        return FieldDecision(rule=MergeRule.WIDENED, kept=b)
    if b_to_a:
        return FieldDecision(rule=MergeRule.WIDENED, kept=a)

    if is_upcastable(a) and is_upcastable(b):
        kind = base_kind(a)
        if kind is not None and kind == base_kind(b):
            return FieldDecision(rule=MergeRule.UPCAST_TO_PRIMITIVE, kept=primitive_for(kind))

    return _DROP


def merge_decisions(a: Schema, b: Schema, policy: Policy) -> Dict[str, FieldDecision]:
    """Per-field decisions for every field shared by ``a`` and ``b``."""
    # iterate a's keys so output order follows the left operand
    return {name: decide_field(a[name], b[name], policy) for name in a if name in b}


def merge(a: Schema, b: Schema, policy: Policy) -> Dict[str, DescriptorModel]:
    """Merge two schemas under ``policy``; returns a new dict, inputs untouched."""
    return {
        name: decision.kept
        for name, decision in merge_decisions(a, b, policy).items()
        if decision.kept is not None
    }


def merge_strict(a: Schema, b: Schema) -> Dict[str, DescriptorModel]:
    """Shared fields whose descriptors are exactly equal."""
    return merge(a, b, Policy.STRICT)


def merge_upcast(a: Schema, b: Schema) -> Dict[str, DescriptorModel]:
    """Shared fields that are equal, widen to one side, or upcast to a common primitive."""
    return merge(a, b, Policy.UPCAST)
