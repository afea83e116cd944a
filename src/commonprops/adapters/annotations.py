"""Adapter: build schemas from Python type annotations.

Supports TypedDict classes, dataclasses and pydantic models. Field annotations
map onto descriptors as follows:

    str / int / float / bool      -> primitives (bool checked before int)
    Literal["a"]                  -> StringLiteral("a")
    Literal[1, 2] / Union[...]    -> union() of members
    Literal[True, False]          -> BooleanPrimitive
    None                          -> Opaque("null")
    classes                       -> Opaque("<module>.<qualname>")
    anything else                 -> Opaque(<annotation repr>)

A multi-value literal such as ``Literal["a", "b"]`` becomes an Opaque rather
than being treated as a string, so under the upcast policy a field typed
``Literal["a", "b"]`` on one side and ``str`` on the other is dropped, not
widened to ``string``. Use ``str`` on both sides when widening is wanted.
"""

import dataclasses
import enum
import types
import typing
from typing import Any, Dict, Literal, Union, get_args, get_origin

from pydantic import BaseModel

from commonprops.kernel.descriptors import (
    BOOLEAN,
    NUMBER,
    STRING,
    DescriptorModel,
    Opaque,
    literal,
    union,
)

_NULL = Opaque(signature="null")

_PRIMITIVES = {
    bool: BOOLEAN,
    str: STRING,
    int: NUMBER,
    float: NUMBER,
}


def _is_union(origin: Any) -> bool:
    return origin is Union or origin is types.UnionType


def _signature(annotation: Any) -> str:
    if isinstance(annotation, type) and get_origin(annotation) is None:
        if annotation.__module__ == "builtins":
            return annotation.__qualname__
        return f"{annotation.__module__}.{annotation.__qualname__}"
    return repr(annotation).replace("typing.", "")


def _literal_member(value: Any) -> DescriptorModel:
    if value is None:
        return _NULL
    if isinstance(value, enum.Enum):
        return Opaque(signature=f"{_signature(type(value))}.{value.name}")
    if isinstance(value, (str, int, float, bool)):
        return literal(value)
    # other literal values (bytes) have no primitive base
    return Opaque(signature=repr(value))


def descriptor_from_annotation(annotation: Any) -> DescriptorModel:
    """Translate one type annotation into a descriptor."""
    if annotation is None or annotation is type(None):
        return _NULL
    if isinstance(annotation, type) and annotation in _PRIMITIVES:
        return _PRIMITIVES[annotation]

    origin = get_origin(annotation)
    if origin is Literal:
        return union(*(_literal_member(v) for v in get_args(annotation)))
    if _is_union(origin):
        return union(*(descriptor_from_annotation(arg) for arg in get_args(annotation)))
    if origin is typing.Annotated:
        return descriptor_from_annotation(get_args(annotation)[0])

    return Opaque(signature=_signature(annotation))


def _field_annotations(tp: type) -> Dict[str, Any]:
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return {name: info.annotation for name, info in tp.model_fields.items()}
    if dataclasses.is_dataclass(tp):
        hints = typing.get_type_hints(tp, include_extras=True)
        return {f.name: hints.get(f.name, f.type) for f in dataclasses.fields(tp)}
    if typing.is_typeddict(tp):
        return typing.get_type_hints(tp, include_extras=True)
    raise TypeError(f"schema_from_type() needs a TypedDict, dataclass or pydantic model, got {tp!r}")


def schema_from_type(tp: type) -> Dict[str, DescriptorModel]:
    """Build a Schema from a TypedDict, dataclass or pydantic model class."""
    return {name: descriptor_from_annotation(ann) for name, ann in _field_annotations(tp).items()}
