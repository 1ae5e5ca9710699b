"""Short constructors for patterns.

Every function returns a `BaseMatcher`. Wherever a pattern is expected, a plain value may be
given instead and means "exactly this value"; `None` means "anything". Inside a children list
a plain string means a text leaf with exactly this content.

>>> from xcuery.node import element, text as txt
>>> entry = element("entry", [], [element("name", [], [txt("Hanus")])])
>>> xml("entry", with_(xml("name", [text(var("n"))]))).first(entry)
{'n': 'Hanus'}

"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Sequence

from .error import PatternDefinitionError
from .pattern import (
    AlternativeMatcher,
    AnyMatcher,
    AnyOrderMatcher,
    AttributesMatcher,
    BaseMatcher,
    DeepMatcher,
    ElementMatcher,
    EmbedMatcher,
    GuardMatcher,
    PartitionMatcher,
    RegexMatcher,
    SequenceMatcher,
    TextMatcher,
    ValueMatcher,
    VarMatcher,
)

_Vars = Mapping[str, Any]


def as_matcher(pattern: Any) -> BaseMatcher:
    """Turn a value-level pattern into a matcher."""
    if isinstance(pattern, BaseMatcher):
        return pattern

    if pattern is None:
        return AnyMatcher()

    return ValueMatcher(pattern)


def as_child(pattern: Any) -> BaseMatcher:
    """Turn a child pattern into a matcher, plain strings being text leaves."""
    if isinstance(pattern, str):
        return TextMatcher(ValueMatcher(pattern))

    if pattern is None:
        raise PatternDefinitionError("A child pattern can't be None, use `node()` for any node")

    return as_matcher(pattern)


def _as_children(children: Any) -> BaseMatcher:
    if isinstance(children, BaseMatcher):
        return children

    if children is None:
        return AnyMatcher()

    if isinstance(children, str) or not isinstance(children, Iterable):
        raise PatternDefinitionError(
            "Children must be a children matcher or a list of child patterns, "
            f"got <{type(children).__name__}>"
        )

    return SequenceMatcher(tuple(as_child(c) for c in children))


def _as_attrs(attrs: Any) -> BaseMatcher:
    if isinstance(attrs, BaseMatcher):
        return attrs

    if isinstance(attrs, str) or not isinstance(attrs, Iterable):
        raise PatternDefinitionError(
            f"Attributes must be a list of (name, pattern) pairs, got <{type(attrs).__name__}>"
        )

    items: list[tuple[str, BaseMatcher]] = []

    for pair in attrs:
        if not isinstance(pair, Sequence) or len(pair) != 2 or not isinstance(pair[0], str):
            raise PatternDefinitionError(
                f"Attribute pattern must be a (name, pattern) pair: {pair!r}"
            )

        items.append((pair[0], as_matcher(pair[1])))

    return AttributesMatcher(tuple(items))


def var(name: str, *, append: bool = False) -> AnyMatcher:
    """Capture anything under `name` (`append=True` collects into a tuple)."""
    return AnyMatcher(name=name, append_to_match=append)


def same(name: str) -> VarMatcher:
    """Match a value equal to the one already captured under `name`."""
    return VarMatcher(name)


def regex(pattern: str, *, name: str | None = None) -> RegexMatcher:
    return RegexMatcher(pattern, name=name)


def node(*, name: str | None = None) -> AnyMatcher:
    """Any single node (element or text)."""
    return AnyMatcher(name=name)


def text(content: Any = None, *, name: str | None = None) -> TextMatcher:
    """A text leaf. `name` captures the leaf itself, use `text(var("n"))` to capture the
    content string."""
    return TextMatcher(as_matcher(content), name=name)


def xml(
    tag: Any,
    children: Any = (),
    attrs: Any = (),
    *,
    name: str | None = None,
) -> ElementMatcher:
    """An element with exactly `attrs` (empty by default) and `children`.

    Args:
        tag: The tag, a tag pattern or None for any tag.
        children: A list of child patterns matched exactly, a children matcher such as
            `with_(...)`, `any_order(...)` or `with_others(...)`, or None for any children.
        attrs: Exact attribute list of (name, value pattern) pairs.
        name: Capture the matched element under this name.

    """
    return ElementMatcher(as_matcher(tag), _as_attrs(attrs), _as_children(children), name=name)


def xml_any(tag: Any = None, children: Any = (), *, name: str | None = None) -> ElementMatcher:
    """Like `xml`, but attributes are ignored."""
    return ElementMatcher(as_matcher(tag), AnyMatcher(), _as_children(children), name=name)


def with_(*patterns: Any, any_order: bool = False, name: str | None = None) -> BaseMatcher:
    """Children containing `patterns` in this order, anything around and between them."""
    matchers = tuple(as_child(p) for p in patterns)

    if any_order:
        return AnyOrderMatcher(matchers, gaps=True, name=name)

    return EmbedMatcher(matchers, name=name)


def any_order(*patterns: Any, name: str | None = None) -> AnyOrderMatcher:
    """Children consisting of exactly `patterns`, in any order."""
    return AnyOrderMatcher(tuple(as_child(p) for p in patterns), name=name)


def with_others(
    *patterns: Any,
    others: str | None = None,
    any_order: bool = False,
    without: Iterable[str] = (),
    name: str | None = None,
) -> PartitionMatcher:
    """Like `with_`, additionally capturing the unmatched children under `others`.

    Args:
        patterns: Child patterns that must be present.
        others: Capture name for the tuple of all other children, in order.
        any_order: Allow `patterns` to appear in any order.
        without: Tags none of the other children may carry.
        name: Capture the whole children tuple under this name.

    """
    if isinstance(without, str):
        without = (without,)

    return PartitionMatcher(
        tuple(as_child(p) for p in patterns),
        others=others,
        any_order=any_order,
        without=tuple(without),
        name=name,
    )


def deep(
    tag: Any,
    children: Any = (),
    attrs: Any = (),
    *,
    name: str | None = None,
    max_depth: int | None = None,
) -> DeepMatcher:
    """An element like `xml(tag, children, attrs)` at any depth of the tree.

    `name` captures the found element.

    """
    return DeepMatcher(xml(tag, children, attrs, name=name), max_depth=max_depth)


def deep_any(
    tag: Any,
    children: Any = (),
    *,
    name: str | None = None,
    max_depth: int | None = None,
) -> DeepMatcher:
    """An element like `xml_any(tag, children)` at any depth of the tree."""
    return DeepMatcher(xml_any(tag, children, name=name), max_depth=max_depth)


def alt(*patterns: Any, name: str | None = None) -> AlternativeMatcher:
    """All solutions of every pattern."""
    return AlternativeMatcher(tuple(as_matcher(p) for p in patterns), name=name)


def guard(pattern: Any, predicate: Callable[[_Vars], bool]) -> GuardMatcher:
    """Solutions of `pattern` for which `predicate(solution)` holds."""
    return GuardMatcher(as_matcher(pattern), predicate)
