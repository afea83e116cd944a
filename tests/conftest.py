"""Pytest configuration and shared schema fixtures.

No sys.path hacks - tests import from the installed commonprops package.
"""

import pytest

from commonprops.kernel.descriptors import (
    BOOLEAN,
    NUMBER,
    STRING,
    BooleanLiteral,
    NumberLiteral,
    Opaque,
    StringLiteral,
)


@pytest.fixture
def cat():
    return {
        "name": STRING,
        "type": StringLiteral(value="cat"),
        "active": BooleanLiteral(value=True),
        "priority": NumberLiteral(value=1),
        "legs": NumberLiteral(value=4),
    }


@pytest.fixture
def dog():
    return {
        "name": STRING,
        "type": StringLiteral(value="dog"),
        "active": BooleanLiteral(value=False),
        "priority": NumberLiteral(value=2),
        "legs": NumberLiteral(value=4),
    }


@pytest.fixture
def bird():
    return {
        "name": STRING,
        "type": StringLiteral(value="bird"),
        "active": BooleanLiteral(value=True),
        "priority": NumberLiteral(value=3),
        "legs": NumberLiteral(value=2),
        "wings": Opaque.of({"count": 2}),
    }


@pytest.fixture
def schema_doc():
    """Factory: document dict for a schema of descriptor models."""
    def _make(fields, name=None):
        doc = {"schema_version": "1", "fields": {k: v.model_dump() for k, v in fields.items()}}
        if name is not None:
            doc["name"] = name
        return doc
    return _make
