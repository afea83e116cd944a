"""Centralized canonical JSON serialization.

Used for opaque descriptor signatures and for every JSON document the package
writes, so equal shapes always serialize to equal text.
"""

import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Canonical JSON serialization.

    Rules:
    - UTF-8 (no ASCII escaping)
    - Sorted keys
    - Compact separators (",", ":")
    - Lists keep their order
    - No NaN/Infinity (raises ValueError)

    Args:
        obj: JSON-compatible Python object

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def pretty_dumps(obj: Any) -> str:
    """Sorted, indented JSON for human-facing output (CLI stdout)."""
    return json.dumps(obj, sort_keys=True, indent=2, ensure_ascii=False, allow_nan=False)
