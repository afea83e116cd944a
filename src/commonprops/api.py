"""Public API for the commonprops package.

High-level functions that return complete, structured results.
Callers should use these instead of importing from _internal.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, Field

from commonprops._internal.io.schema_file import SchemaDocument, coerce_schema, schema_to_document
from commonprops.codes import DropReason, Policy
from commonprops.kernel.classifier import base_kind, is_upcastable
from commonprops.kernel.descriptors import DescriptorModel, descriptor_from_dict
from commonprops.kernel.fold import trace_fold

logger = logging.getLogger("commonprops.api")

SchemaInput = Union[Mapping[str, Any], SchemaDocument, str, os.PathLike, Path]


class IntersectResult(BaseModel):
    """Stable result model for an intersection."""
    policy: Policy
    schema_count: int
    fields: Dict[str, Dict[str, Any]]  # name -> descriptor dict, sorted by name
    kept: List[str]  # sorted field names in the result
    dropped: Dict[str, DropReason] = Field(default_factory=dict)  # input field -> why it is absent
    widened: List[str] = Field(default_factory=list)  # kept fields that differ from some input

    def schema_document(self, name: Optional[str] = None) -> Dict[str, Any]:
        """The result as a schema document dict."""
        return schema_to_document(self.to_schema(), name)

    def to_schema(self) -> Dict[str, DescriptorModel]:
        return {key: descriptor_from_dict(value) for key, value in self.fields.items()}


class ClassifyResult(BaseModel):
    """Classification of a single descriptor."""
    descriptor: str  # rendered type expression
    upcastable: bool
    base_kind: Optional[str] = None


def _normalize_input(value: SchemaInput) -> Dict[str, DescriptorModel]:
    if isinstance(value, os.PathLike) and not isinstance(value, Path):
        value = Path(value)
    return coerce_schema(value)


def intersect(
    schemas: Iterable[SchemaInput],
    policy: Union[Policy, str] = Policy.UPCAST,
    default: Optional[SchemaInput] = None,
) -> IntersectResult:
    """Intersect schemas under ``policy`` and describe what was kept and dropped.

    Args:
        schemas: Schema mappings, SchemaDocuments, document dicts or JSON paths
        policy: "strict" or "upcast"
        default: result used when ``schemas`` is empty (``{}`` when omitted)

    Returns:
        IntersectResult
    """
    policy = Policy(policy)
    inputs = [_normalize_input(s) for s in schemas]
    empty = _normalize_input(default) if default is not None else None

    trace = trace_fold(inputs, policy, empty)
    result = trace.result

    widened = sorted(
        name for name, descriptor in result.items()
        if any(schema.get(name) != descriptor for schema in inputs)
    )
    dropped = trace.dropped()

    logger.info(
        "intersect %d schemas (%s): kept=%d dropped=%d widened=%d",
        len(inputs), policy.value, len(result), len(dropped), len(widened),
    )

    return IntersectResult(
        policy=policy,
        schema_count=trace.schema_count,
        fields={key: result[key].model_dump() for key in sorted(result)},
        kept=sorted(result),
        dropped=dropped,
        widened=widened,
    )


def classify_descriptor(descriptor: Union[DescriptorModel, Mapping[str, Any]]) -> ClassifyResult:
    """Report whether a descriptor is upcastable and its base kind."""
    if not isinstance(descriptor, DescriptorModel):
        descriptor = descriptor_from_dict(descriptor)
    kind = base_kind(descriptor)
    return ClassifyResult(
        descriptor=descriptor.render(),
        upcastable=is_upcastable(descriptor),
        base_kind=kind.value if kind is not None else None,
    )
