"""Unbounded-depth subtree search.

At every node of a tree a pattern may either match the node itself or match anywhere below
one of its children. Both alternatives are always explored, so a node that matches and also
contains deeper matches produces all of them.

"""
from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, Any, Deque, Iterator, Mapping, Sequence

from .. import config
from ..node import XmlNode
from .error import PatternDefinitionError

if TYPE_CHECKING:
    from .pattern import BaseMatcher

logger = logging.getLogger(__name__)

_Vars = Mapping[str, Any]


def search_tree(
    matcher: BaseMatcher,
    node: Any,
    ctx: _Vars | None = None,
    max_depth: int | None = None,
) -> Iterator[_Vars]:
    """Lazily yield every solution of `matcher` at `node` or at any node below it.

    Solutions come in pre-order: the node itself first, then each child's subtree in document
    order. Each child is searched on its own, its siblings are left unconstrained.

    Args:
        matcher: Pattern applied to every visited node.
        node: Root of the search. Anything but an `XmlNode` yields nothing.
        ctx: Bindings captured so far.
        max_depth: If set, nodes deeper than this below `node` are not visited
            (0 means only `node` itself).

    Raises:
        PatternDefinitionError: If `max_depth` is negative.

    """
    if max_depth is not None and max_depth < 0:
        raise PatternDefinitionError(f"Search depth must be >= 0, got {max_depth}")

    return _search(matcher, node, {} if ctx is None else ctx, max_depth)


def _search(
    matcher: BaseMatcher, node: Any, ctx: _Vars, max_depth: int | None
) -> Iterator[_Vars]:
    if not isinstance(node, XmlNode):
        return

    pending: Deque[tuple[XmlNode, int]] = deque([(node, 0)])

    while pending:
        current, depth = pending.popleft()

        if config.TRACE_LOGGING:
            label = "text" if current.tag is None else current.tag
            logger.debug(f"Deep search visiting <{label}> at depth {depth}")

        # Match here
        yield from matcher.match(current, ctx)

        # ...or below exactly one child, siblings ignored
        if max_depth is None or depth < max_depth:
            pending.extendleft((c, depth + 1) for c in reversed(current.children))


def deep_search(
    tag: str | None,
    attrs: Sequence[tuple[str, Any]] | None,
    children: Any,
    node: Any,
    ctx: _Vars | None = None,
) -> Iterator[_Vars]:
    """Search `node` at every depth for elements matching `tag`, `attrs` and `children`.

    Args:
        tag: Required tag, None for any tag.
        attrs: None to ignore attributes, otherwise the exact attribute list
            (values may be plain strings or patterns).
        children: Children pattern, either a children matcher (e.g. `with_(...)`) or a list of
            child patterns that must match the children exactly.
        node: Tree to search. A `Text` leaf never matches.
        ctx: Bindings captured so far.

    Returns:
        A lazy iterator of solutions.

    """
    # Import here to avoid circular imports
    from .builder import xml, xml_any

    if attrs is None:
        pattern = xml_any(tag, children)
    else:
        pattern = xml(tag, children, attrs)

    return search_tree(pattern, node, ctx)
