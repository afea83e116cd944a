"""Algebraic properties of the pairwise merges over a fixed pool of schemas."""

import itertools

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
from commonprops.kernel.merge import merge_strict, merge_upcast

POOL = [
    {},
    {"name": STRING, "type": StringLiteral(value="cat"), "active": BooleanLiteral(value=True)},
    {"name": STRING, "type": StringLiteral(value="dog"), "active": BooleanLiteral(value=False)},
    {"name": StringLiteral(value="rex"), "type": STRING, "active": BOOLEAN, "legs": NumberLiteral(value=4)},
    {"name": NUMBER, "legs": NumberLiteral(value=2), "meta": Opaque.of({"a": 1})},
    {"type": NumberLiteral(value=1), "meta": Opaque.of({"a": 1}), "tags": Opaque(signature="string[]")},
    {"type": StringLiteral(value="1"), "meta": Opaque.of({"b": 1}), "active": BooleanLiteral(value=True)},
]

PAIRS = list(itertools.product(range(len(POOL)), repeat=2))
MERGES = [merge_strict, merge_upcast]


@pytest.mark.parametrize("merge", MERGES)
@pytest.mark.parametrize("i", range(len(POOL)))
def test_idempotent(merge, i):
    assert merge(POOL[i], POOL[i]) == POOL[i]


@pytest.mark.parametrize("merge", MERGES)
@pytest.mark.parametrize("i,j", PAIRS)
def test_commutative(merge, i, j):
    assert merge(POOL[i], POOL[j]) == merge(POOL[j], POOL[i])


@pytest.mark.parametrize("merge", MERGES)
@pytest.mark.parametrize("i,j", PAIRS)
def test_keys_subset_of_shared(merge, i, j):
    result = merge(POOL[i], POOL[j])
    assert set(result) <= set(POOL[i]) & set(POOL[j])


@pytest.mark.parametrize("i,j", PAIRS)
def test_upcast_keeps_everything_strict_keeps(i, j):
    strict = merge_strict(POOL[i], POOL[j])
    upcast = merge_upcast(POOL[i], POOL[j])
    for name, descriptor in strict.items():
        assert upcast[name] == descriptor


@pytest.mark.parametrize("i,j", PAIRS)
def test_upcast_result_generalizes_both_sides(i, j):
    """Every kept value is something both inputs are assignable to."""
    from commonprops.kernel.oracle import is_assignable

    for name, descriptor in merge_upcast(POOL[i], POOL[j]).items():
        assert is_assignable(POOL[i][name], descriptor)
        assert is_assignable(POOL[j][name], descriptor)


@pytest.mark.parametrize("i,j,k", list(itertools.permutations(range(1, len(POOL)), 3)))
def test_upcast_fold_order_independent(i, j, k):
    """Left fold gives the same result for any ordering of three inputs."""
    a, b, c = POOL[i], POOL[j], POOL[k]
    assert merge_upcast(merge_upcast(a, b), c) == merge_upcast(a, merge_upcast(b, c))
