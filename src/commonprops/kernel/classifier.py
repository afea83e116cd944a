"""Literal classification: which descriptors can be upcast, and to what."""

from typing import Optional

from .descriptors import (
    BOOLEAN,
    NUMBER,
    STRING,
    BaseKind,
    BooleanLiteral,
    BooleanPrimitive,
    DescriptorModel,
    LITERAL_TYPES,
    NumberLiteral,
    NumberPrimitive,
    StringLiteral,
    StringPrimitive,
)


_KIND_BY_TYPE = {
    StringLiteral: BaseKind.STRING,
    StringPrimitive: BaseKind.STRING,
    NumberLiteral: BaseKind.NUMBER,
    NumberPrimitive: BaseKind.NUMBER,
    BooleanLiteral: BaseKind.BOOLEAN,
    BooleanPrimitive: BaseKind.BOOLEAN,
}

_PRIMITIVE_BY_KIND = {
    BaseKind.STRING: STRING,
    BaseKind.NUMBER: NUMBER,
    BaseKind.BOOLEAN: BOOLEAN,
}


def is_upcastable(descriptor: DescriptorModel) -> bool:
    """True iff the descriptor is a string, number or boolean literal.

    Primitives are already at their base and Opaque never upcasts. "Any
    boolean" is represented as BooleanPrimitive, so it is not upcastable.
    """
    return isinstance(descriptor, LITERAL_TYPES)


# Public alias matching the operation name used in reports and the CLI.
classify = is_upcastable


def base_kind(descriptor: DescriptorModel) -> Optional[BaseKind]:
    """Base kind of a literal or primitive, None for Opaque."""
    return _KIND_BY_TYPE.get(type(descriptor))


def primitive_for(kind: BaseKind) -> DescriptorModel:
    """The unconstrained primitive descriptor for a base kind."""
    return _PRIMITIVE_BY_KIND[BaseKind(kind)]
