from __future__ import annotations

from typing import Iterator, Sequence, TypeVar

from .error import PatternDefinitionError

_T = TypeVar("_T")


def _permute(items: tuple[_T, ...]) -> Iterator[tuple[_T, ...]]:
    if not items:
        yield ()
        return

    head, tail = items[0], items[1:]

    for ys in _permute(tail):
        for i in range(len(ys) + 1):
            yield (*ys[:i], head, *ys[i:])


def permute(items: Sequence[_T]) -> Iterator[tuple[_T, ...]]:
    """Lazily enumerate all n! orderings of `items`.

    Positions are distinct even if values are equal, so equal items produce repeated
    orderings. The first item is inserted at every position of every ordering of the rest,
    hence the identity ordering comes first.

    >>> list(permute("ab"))
    [('a', 'b'), ('b', 'a')]

    """
    if not isinstance(items, Sequence):
        raise PatternDefinitionError(
            f"Only sequences can be permuted, got <{type(items).__name__}>"
        )

    return _permute(tuple(items))
