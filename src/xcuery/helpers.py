from __future__ import annotations

from typing import Iterable

from .node import Element, XmlNode, tag_of


def select_or_default(
    tag: str, default_children: Iterable[XmlNode], candidates: Iterable[XmlNode]
) -> XmlNode:
    """Returns the first of `candidates` tagged `tag`, or a new `Element(tag, (), default_children)`
    if there is none.

    Deterministic, never fails. Typically applied to the "others" captured by a partition to
    fetch an optional element with a fallback, e.g. a phone number or "unknown".

    """
    for node in candidates:
        if tag_of(node) == tag:
            return node

    return Element(tag, (), tuple(default_children))


def tag_absent(tag: str, elements: Iterable[XmlNode]) -> bool:
    """True iff no element of `elements` is an element tagged `tag`.

    Text leaves carry no tag and never count.

    """
    return all(tag_of(node) != tag for node in elements)
