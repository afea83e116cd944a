"""Left fold of the pairwise merge across a sequence of schemas."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from commonprops.codes import DropReason, Policy

from .descriptors import DescriptorModel, Schema
from .merge import FieldDecision, merge, merge_decisions

logger = logging.getLogger("commonprops.fold")


@dataclass
class FoldStep:
    """One pairwise merge inside a fold: accumulator merged with input ``index``."""
    index: int  # 0-based position of the right-hand input schema
    decisions: Dict[str, FieldDecision]
    not_shared: List[str]  # sorted names present on exactly one side


@dataclass
class FoldTrace:
    """Result of a fold plus every per-field decision taken on the way."""
    policy: Policy
    schema_count: int
    result: Dict[str, DescriptorModel]
    steps: List[FoldStep] = field(default_factory=list)

    def dropped(self) -> Dict[str, DropReason]:
        """Field name -> reason for every input field missing from the result.

        The first step that removed a field determines its reason.
        """
        reasons: Dict[str, DropReason] = {}
        for step in self.steps:
            for name in step.not_shared:
                reasons.setdefault(name, DropReason.NOT_SHARED)
            for name, decision in step.decisions.items():
                if not decision.is_kept:
                    reasons.setdefault(name, DropReason.INCOMPATIBLE)
        return {name: reasons[name] for name in sorted(reasons)}


def trace_fold(
    schemas: Iterable[Schema],
    policy: Policy,
    empty: Optional[Schema] = None,
) -> FoldTrace:
    """Fold ``schemas`` left to right under ``policy``, recording each step.

    - no schemas: the result is ``empty`` (``{}`` when not given)
    - one schema: the result has that schema's fields, no merge happens
    - otherwise: merge(merge(S1, S2), S3) ... with each intermediate merged
      against the next raw input on equal footing

    Iterative, so the schema count never grows the call stack.
    """
    policy = Policy(policy)
    steps: List[FoldStep] = []
    acc: Optional[Dict[str, DescriptorModel]] = None
    count = 0

    for index, schema in enumerate(schemas):
        count += 1
        if acc is None:
            acc = dict(schema)
            continue
        decisions = merge_decisions(acc, schema, policy)
        not_shared = sorted(set(acc).symmetric_difference(schema))
        acc = {name: d.kept for name, d in decisions.items() if d.kept is not None}
        steps.append(FoldStep(index=index, decisions=decisions, not_shared=not_shared))
        logger.debug(
            "fold step %d (%s): kept=%d dropped=%d not_shared=%d",
            index, policy.value, len(acc), len(decisions) - len(acc), len(not_shared),
        )

    if acc is None:
        acc = dict(empty) if empty is not None else {}

    return FoldTrace(policy=policy, schema_count=count, result=acc, steps=steps)


def fold(
    schemas: Iterable[Schema],
    policy: Policy,
    empty: Optional[Schema] = None,
) -> Dict[str, DescriptorModel]:
    """Intersect all ``schemas`` under ``policy``; ``empty`` is returned for no input.

    Same fold as trace_fold() but only the accumulator is kept alive.
    """
    policy = Policy(policy)
    acc: Optional[Dict[str, DescriptorModel]] = None
    for index, schema in enumerate(schemas):
        if acc is None:
            acc = dict(schema)
            continue
        acc = merge(acc, schema, policy)
        logger.debug("fold step %d (%s): kept=%d", index, policy.value, len(acc))
    if acc is None:
        return dict(empty) if empty is not None else {}
    return acc


def fold_strict(schemas: Iterable[Schema], empty: Optional[Schema] = None) -> Dict[str, DescriptorModel]:
    return fold(schemas, Policy.STRICT, empty)


def fold_upcast(schemas: Iterable[Schema], empty: Optional[Schema] = None) -> Dict[str, DescriptorModel]:
    return fold(schemas, Policy.UPCAST, empty)
