from __future__ import annotations

from collections import deque
from collections.abc import Generator, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Deque, Sequence

from rich.markup import escape
from rich.tree import Tree

from . import config
from .error import InvalidTypes
from .serialize import NodeSerializeMixin

Attribute = tuple[str, str]
Attributes = tuple[Attribute, ...]


@dataclass(frozen=True, slots=True)
class XmlNode(NodeSerializeMixin):
    """A base class for both variants of a semistructured tree: `Text` leaves and `Element`s.

    Nodes are immutable values. Two nodes are equal iff they are structurally equal, i.e.
    have the same variant, tag, attributes (in order) and children (recursively, in order).
    Nodes are hashable, so sets of nodes or of solutions containing nodes can be built.

    Provides the following functions:
        - Tree walking (`dfs`, `bfs`, `find_elements`)
        - Serialization & deserialization (dict, JSON, YAML)
        - rich console API support (for printing)

    """

    if TYPE_CHECKING:
        # Provided by the variants: a field on `Element`, a property on `Text`
        @property
        def children(self) -> tuple[XmlNode, ...]:
            ...

        @property
        def tag(self) -> str | None:
            ...

    def dfs(
        self,
        prune: Callable[[XmlNode], bool] | None = None,
        filter: Callable[[XmlNode], bool] | None = None,
        skip_self: bool = False,
    ) -> Generator[XmlNode, None, None]:
        """Returns a generator object which lazily visits all nodes in this tree in the DFS
        (Depth-first, pre-order) order.

        Args:
            prune (Callable[[XmlNode], bool] | None, optional): An optional function which if it returns True will prevent further decent into the children of this element.
            filter (Callable[[XmlNode], bool] | None, optional): An optional function which if it returns False will prevent the element from being yielded, but won't interrupt the recursive decent.
            skip_self (bool, optional): Doesn't yield self. Defaults to False.

        Yields:
            Generator[XmlNode, None, None]: The nodes of this tree, parents before children,
                siblings in document order.

        """
        stack: Deque[XmlNode] = deque([self])

        while stack:
            node = stack.popleft()

            if not skip_self:
                if filter is None or filter(node):
                    yield node

                if prune and prune(node):
                    continue
            else:
                skip_self = False

            # Walk through children, keeping document order on the stack
            stack.extendleft(reversed(node.children))

    def bfs(
        self,
        prune: Callable[[XmlNode], bool] | None = None,
        filter: Callable[[XmlNode], bool] | None = None,
        skip_self: bool = False,
    ) -> Generator[XmlNode, None, None]:
        """Returns a generator object which visits all nodes in this tree in the BFS (Breadth-first)
        order.

        Args:
            prune (Callable[[XmlNode], bool]): An optional function which if it returns True will prevent further decent into the children of this element.
            filter (Callable[[XmlNode], bool]): An optional function which if it returns False will prevent the element from being yielded, but won't interrupt the recursive decent.

        Returns:
            the generator object.

        """
        queue: Deque[XmlNode] = deque([self])

        while queue:
            node = queue.popleft()

            if not skip_self:
                if filter is None or filter(node):
                    yield node

                if prune and prune(node):
                    continue
            else:
                skip_self = False

            queue.extend(node.children)

    def find_elements(self, tag: str) -> Generator[Element, None, None]:
        """Shorthand for traversing the tree and gathering all elements with the given `tag`."""
        for node in self.dfs(filter=lambda n: n.tag == tag):
            assert isinstance(node, Element)
            yield node

    def __rich__(self, parent: Tree | None = None) -> Tree:
        """Returns a tree widget for the 'rich' library."""
        return self._rich(parent)

    def _rich(self, parent: Tree | None) -> Tree:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Text(XmlNode):
    """A text leaf."""

    content: str

    @property
    def children(self) -> tuple[XmlNode, ...]:
        return ()

    @property
    def tag(self) -> str | None:
        return None

    def __post_init__(self) -> None:
        if config.RUNTIME_TYPE_CHECK and not isinstance(self.content, str):
            raise InvalidTypes([("content", "str", self.content)])

    def _rich(self, parent: Tree | None) -> Tree:
        name = f":spiral_notepad: [yellow]text[/]={escape(repr(self.content))}"

        if parent:
            return parent.add(name)

        return Tree(name)


@dataclass(frozen=True, slots=True)
class Element(XmlNode):
    """A tagged element with an ordered attribute list and ordered children.

    Attribute names are not required to be unique. Lists passed as `attrs` or `children`
    are stored as tuples.

    """

    tag: str
    attrs: Attributes = field(default=())
    children: tuple[XmlNode, ...] = field(default=())

    def __post_init__(self) -> None:
        if not isinstance(self.attrs, tuple) or not all(isinstance(a, tuple) for a in self.attrs):
            object.__setattr__(self, "attrs", tuple(tuple(a) for a in self.attrs))

        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

        if config.RUNTIME_TYPE_CHECK:
            invalid: list[tuple[str, str, Any]] = []

            if not isinstance(self.tag, str):
                invalid.append(("tag", "str", self.tag))

            for a in self.attrs:
                if len(a) != 2 or not all(isinstance(v, str) for v in a):
                    invalid.append(("attrs", "tuple[str, str]", a))

            for c in self.children:
                if not isinstance(c, XmlNode):
                    invalid.append(("children", "XmlNode", c))

            if invalid:
                raise InvalidTypes(invalid)

    def attr(self, name: str, default: str | None = None) -> str | None:
        """Returns the value of the first attribute called `name`, or `default`."""
        for aname, value in self.attrs:
            if aname == name:
                return value

        return default

    @property
    def text_content(self) -> str:
        """Concatenated content of the direct `Text` children."""
        return "".join(c.content for c in self.children if isinstance(c, Text))

    def _rich(self, parent: Tree | None) -> Tree:
        name = f":deciduous_tree:[bold green]{escape(self.tag)}[/bold green]"

        if parent:
            tree = parent.add(name)
        else:
            tree = Tree(name)

        for aname, value in self.attrs:
            tree.add(f":round_pushpin: [yellow]@{escape(aname)}[/]={escape(value)}")

        for c in self.children:
            c._rich(tree)

        return tree


def text(content: str) -> Text:
    """Construct a text leaf."""
    return Text(content)


def element(
    tag: str,
    attrs: Iterable[Attribute] | None = None,
    children: Iterable[XmlNode] | None = None,
    *more_children: XmlNode,
) -> Element:
    """Construct an element.

    Children may be passed as an iterable, positionally after `attrs`, or both (in that order).

    >>> element("name", [], [text("Hanus")]) == element("name", None, None, text("Hanus"))
    True

    """
    return Element(
        tag,
        tuple(attrs or ()),
        (*(children or ()), *more_children),
    )


def tag_of(node: XmlNode) -> str | None:
    """Returns the tag of an element, None for text leaves."""
    return node.tag


def tags_of(nodes: Sequence[XmlNode]) -> list[str | None]:
    return [n.tag for n in nodes]
