"""Subtype oracle: assignability between descriptors."""

from .classifier import base_kind, is_upcastable
from .descriptors import DescriptorModel, PRIMITIVE_TYPES


def is_assignable(a: DescriptorModel, b: DescriptorModel) -> bool:
    """True iff ``a`` is assignable to ``b`` (``a`` is at least as specific).

    Holds when the descriptors are structurally equal, or when ``a`` is a
    literal and ``b`` is the primitive of the same base kind. Opaque
    descriptors are only assignable to an identical Opaque.
    """
    if a == b:
        return True
    if is_upcastable(a) and isinstance(b, PRIMITIVE_TYPES):
        return base_kind(a) == base_kind(b)
    return False


def is_exact_match(a: DescriptorModel, b: DescriptorModel) -> bool:
    """Assignable both ways; equivalent to structural equality."""
    return is_assignable(a, b) and is_assignable(b, a)
