"""Ordered-subsequence embedding with gaps and complement partitioning.

An embedding of `required` patterns into a `target` list is a strictly increasing choice of
positions, one per pattern, such that every chosen target element matches its pattern. Target
elements that are not chosen are gaps and are never inspected.

"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterator, Mapping, NamedTuple, Sequence

from .. import config
from .error import PatternDefinitionError

if TYPE_CHECKING:
    from ..node import XmlNode
    from .pattern import BaseMatcher

logger = logging.getLogger(__name__)

_Vars = Mapping[str, Any]


class Embedding(NamedTuple):
    positions: tuple[int, ...]
    """Strictly increasing target positions, one per required pattern."""

    bindings: _Vars
    """Incoming bindings extended with everything captured by the required patterns."""


class Partition(NamedTuple):
    positions: tuple[int, ...]
    others: tuple[XmlNode, ...]
    """Every target element not at `positions`, in original order."""

    bindings: _Vars


def _check_args(required: Any, target: Any) -> None:
    if not isinstance(required, Sequence) or isinstance(required, str):
        raise PatternDefinitionError(
            f"Required patterns must be a sequence of matchers, got <{type(required).__name__}>"
        )

    if not isinstance(target, Sequence) or isinstance(target, str):
        raise PatternDefinitionError(
            f"Embedding target must be a sequence of nodes, got <{type(target).__name__}>"
        )


def _embed(
    required: tuple[BaseMatcher, ...],
    target: Sequence[XmlNode],
    start: int,
    positions: tuple[int, ...],
    ctx: _Vars,
) -> Iterator[Embedding]:
    i = len(positions)

    if i == len(required):
        yield Embedding(positions, ctx)
        return

    matcher = required[i]

    # Gaps first: skip 0, then 1, ... elements, leaving room for the remaining patterns
    last = len(target) - (len(required) - i)

    for pos in range(start, last + 1):
        for bindings in matcher.match(target[pos], ctx):
            yield from _embed(required, target, pos + 1, (*positions, pos), bindings)


def embed(
    required: Sequence[BaseMatcher],
    target: Sequence[XmlNode],
    ctx: _Vars | None = None,
) -> Iterator[Embedding]:
    """Lazily enumerate every embedding of `required` into `target`.

    Solutions are yielded left-to-right, gaps first. An empty `required` yields exactly one
    embedding with no positions. More patterns than target elements yields nothing.

    Args:
        required: Patterns that must appear in `target` in this relative order.
        target: The list searched, e.g. children of an element.
        ctx: Bindings captured so far. Captures of earlier patterns are visible to later ones.

    Raises:
        PatternDefinitionError: If `required` or `target` is not a sequence. Raised
            immediately, not on first iteration.

    """
    _check_args(required, target)

    if config.TRACE_LOGGING:
        logger.debug(f"Embedding {len(required)} pattern(s) into {len(target)} element(s)")

    return _embed(tuple(required), target, 0, (), {} if ctx is None else ctx)


def complement(target: Sequence[XmlNode], positions: Sequence[int]) -> tuple[XmlNode, ...]:
    """Returns the elements of `target` not at `positions`, preserving order."""
    chosen = set(positions)
    return tuple(node for i, node in enumerate(target) if i not in chosen)


def _partition(
    required: tuple[BaseMatcher, ...], target: Sequence[XmlNode], ctx: _Vars
) -> Iterator[Partition]:
    for positions, bindings in _embed(required, target, 0, (), ctx):
        yield Partition(positions, complement(target, positions), bindings)


def partition(
    required: Sequence[BaseMatcher],
    target: Sequence[XmlNode],
    ctx: _Vars | None = None,
) -> Iterator[Partition]:
    """Like `embed`, but each solution also carries the exact complement of the match.

    For every solution `len(others) + len(required) == len(target)` and merging `others` back
    with the matched elements at `positions` reconstructs `target`.

    Raises:
        PatternDefinitionError: If `required` or `target` is not a sequence.

    """
    _check_args(required, target)

    if config.TRACE_LOGGING:
        logger.debug(f"Partitioning {len(target)} element(s) by {len(required)} pattern(s)")

    return _partition(tuple(required), target, {} if ctx is None else ctx)
