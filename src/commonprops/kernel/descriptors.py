"""Type descriptor models: literals, primitives and opaque types.

A descriptor is the declared type of one schema field. Descriptors are frozen
pydantic models discriminated on ``kind`` so they compare structurally, hash,
and round-trip through JSON documents.

Representation rules:
- A BooleanLiteral denotes exactly one value. "Either boolean" is always
  BooleanPrimitive; union() collapses {true, false} to it.
- NumberLiteral never holds a bool and never holds NaN/Inf.
- Opaque is compared only by signature equality.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Mapping, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    field_validator,
)

from commonprops._internal.canonical_json import canonical_dumps


class DescriptorError(ValueError):
    """Raised when a Python value cannot be turned into a descriptor."""


class BaseKind(str, Enum):
    """Primitive base kinds a literal can be upcast to."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class DescriptorModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def render(self) -> str:
        """Human-readable type expression, e.g. ``"cat"``, ``42``, ``string``."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


class StringLiteral(DescriptorModel):
    kind: Literal["string_literal"] = "string_literal"
    value: StrictStr

    def render(self) -> str:
        return canonical_dumps(self.value)


class NumberLiteral(DescriptorModel):
    kind: Literal["number_literal"] = "number_literal"
    value: Union[StrictInt, StrictFloat]

    @field_validator("value", mode="before")
    @classmethod
    def reject_bool(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("Number literal cannot hold a bool; use BooleanLiteral")
        return v

    @field_validator("value")
    @classmethod
    def validate_finite(cls, v: Union[int, float]) -> Union[int, float]:
        """Reject NaN/Inf: NaN is not equal to itself, which breaks idempotent merges."""
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError(f"Number literal must be finite, got {v!r}")
        return v

    def render(self) -> str:
        if isinstance(self.value, float) and self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


class BooleanLiteral(DescriptorModel):
    kind: Literal["boolean_literal"] = "boolean_literal"
    value: StrictBool

    def render(self) -> str:
        return "true" if self.value else "false"


class StringPrimitive(DescriptorModel):
    kind: Literal["string"] = "string"

    def render(self) -> str:
        return "string"


class NumberPrimitive(DescriptorModel):
    kind: Literal["number"] = "number"

    def render(self) -> str:
        return "number"


class BooleanPrimitive(DescriptorModel):
    kind: Literal["boolean"] = "boolean"

    def render(self) -> str:
        return "boolean"


class Opaque(DescriptorModel):
    """Any type that is not a literal or primitive (object, array, null, ...)."""

    kind: Literal["opaque"] = "opaque"
    signature: StrictStr

    def render(self) -> str:
        return self.signature

    @classmethod
    def of(cls, shape: Any) -> "Opaque":
        """Build an opaque descriptor from a JSON-compatible shape.

        Two shapes produce equal descriptors iff their canonical JSON is equal,
        so key order inside nested objects does not matter.
        """
        return cls(signature=canonical_dumps(shape))


TypeDescriptor = Annotated[
    Union[
        StringLiteral,
        NumberLiteral,
        BooleanLiteral,
        StringPrimitive,
        NumberPrimitive,
        BooleanPrimitive,
        Opaque,
    ],
    Field(discriminator="kind"),
]

LITERAL_TYPES = (StringLiteral, NumberLiteral, BooleanLiteral)
PRIMITIVE_TYPES = (StringPrimitive, NumberPrimitive, BooleanPrimitive)

# Field name -> descriptor. Kernel functions accept any Mapping and return a new dict.
Schema = Mapping[str, TypeDescriptor]

STRING = StringPrimitive()
NUMBER = NumberPrimitive()
BOOLEAN = BooleanPrimitive()

_descriptor_adapter: TypeAdapter = TypeAdapter(TypeDescriptor)


def literal(value: Any) -> DescriptorModel:
    """Build the literal descriptor for a Python scalar.

    bool is checked before int since bool is an int subclass.
    """
    if isinstance(value, bool):
        return BooleanLiteral(value=value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise DescriptorError(f"No literal descriptor for non-finite number {value!r}")
        return NumberLiteral(value=value)
    if isinstance(value, str):
        return StringLiteral(value=value)
    raise DescriptorError(f"No literal descriptor for value of type {type(value).__name__}")


def _member_dict(member: DescriptorModel) -> Dict[str, Any]:
    data = member.model_dump()
    # 1 and 1.0 are the same literal
    if isinstance(member, NumberLiteral) and isinstance(member.value, float) and member.value.is_integer():
        data["value"] = int(member.value)
    return data


def union(*members: DescriptorModel) -> DescriptorModel:
    """Reduce a set of descriptors to the single descriptor representing them.

    Rules:
    - duplicates collapse;
    - BooleanLiteral(True) together with BooleanLiteral(False) becomes BooleanPrimitive;
    - a primitive absorbs literals of its own kind;
    - one remaining member is returned as-is;
    - anything else becomes an Opaque whose signature is the canonical JSON
      ``{"union": [...]}`` of the member dicts in sorted order.
    """
    if not members:
        raise DescriptorError("union() needs at least one member")
    for m in members:
        if not isinstance(m, DescriptorModel):
            raise DescriptorError(f"Union member must be a descriptor, got {type(m).__name__}")

    # dict preserves first-seen order while deduplicating
    unique: Dict[DescriptorModel, None] = dict.fromkeys(members)

    booleans = {m.value for m in unique if isinstance(m, BooleanLiteral)}
    if booleans == {True, False}:
        unique = {m: None for m in unique if not isinstance(m, BooleanLiteral)}
        unique[BOOLEAN] = None

    absorbing = {
        StringLiteral: STRING in unique,
        NumberLiteral: NUMBER in unique,
        BooleanLiteral: BOOLEAN in unique,
    }
    remaining: List[DescriptorModel] = [m for m in unique if not absorbing.get(type(m), False)]

    if len(remaining) == 1:
        return remaining[0]
    ordered = sorted((_member_dict(m) for m in remaining), key=canonical_dumps)
    return Opaque(signature=canonical_dumps({"union": ordered}))


def descriptor_from_dict(data: Mapping[str, Any]) -> DescriptorModel:
    """Validate a descriptor dict (``{"kind": ..., ...}``) into a model."""
    return _descriptor_adapter.validate_python(dict(data))


def descriptor_to_dict(descriptor: DescriptorModel) -> Dict[str, Any]:
    return descriptor.model_dump()
