"""Non-deterministic structural queries over XML-like trees."""
from .helpers import select_or_default, tag_absent
from .node import Element, Text, XmlNode, element, tag_of, text

__all__ = [
    "Element",
    "Text",
    "XmlNode",
    "element",
    "select_or_default",
    "tag_absent",
    "tag_of",
    "text",
]
