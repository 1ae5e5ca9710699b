from __future__ import annotations

import itertools
import math

import pytest
from xcuery.match.error import PatternDefinitionError
from xcuery.match.permute import permute


def test_permute_empty() -> None:
    assert list(permute([])) == [()]


def test_permute_order() -> None:
    # The first item is inserted at every position of every ordering of the rest
    assert list(permute([1, 2, 3])) == [
        (1, 2, 3),
        (2, 1, 3),
        (2, 3, 1),
        (1, 3, 2),
        (3, 1, 2),
        (3, 2, 1),
    ]


@pytest.mark.parametrize("n", range(7))
def test_permute_all_orderings(n: int) -> None:
    got = list(permute(range(n)))

    assert len(got) == math.factorial(n)
    assert set(got) == set(itertools.permutations(range(n)))


def test_permute_equal_values_are_distinct() -> None:
    assert list(permute("aa")) == [("a", "a"), ("a", "a")]


def test_permute_is_lazy() -> None:
    assert next(permute(range(50))) == tuple(range(50))


@pytest.mark.parametrize("items", [5, {1, 2}, None], ids=["int", "set", "none"])
def test_permute_invalid(items: object) -> None:
    with pytest.raises(PatternDefinitionError, match="Only sequences can be permuted"):
        permute(items)  # type: ignore[arg-type]
