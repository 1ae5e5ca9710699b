from __future__ import annotations

import pytest
from rich.console import Console
from xcuery.error import InvalidTypes
from xcuery.node import Element, Text, XmlNode, element, tag_of, tags_of, text

from tests.xcuery.conftest import ConfigFixtureProtocol, leaf


def test_structural_equality() -> None:
    assert text("a") == Text("a")
    assert text("a") != text("b")
    assert element("a") == Element("a", (), ())
    assert element("a", [("x", "1")], [text("t")]) == Element("a", (("x", "1"),), (Text("t"),))

    # Attribute order matters
    assert element("a", [("x", "1"), ("y", "2")]) != element("a", [("y", "2"), ("x", "1")])

    # Child order matters
    assert element("a", [], [leaf("b", "1"), leaf("c", "2")]) != element(
        "a", [], [leaf("c", "2"), leaf("b", "1")]
    )

    # Variants are never equal
    assert Text("a") != Element("a")


def test_lists_are_normalized() -> None:
    node = Element("a", [["x", "1"]], [text("t")])  # type: ignore[arg-type]

    assert node.attrs == (("x", "1"),)
    assert node.children == (Text("t"),)

    # Hashable, so solutions can be de-duplicated with a set
    assert len({node, Element("a", (("x", "1"),), (Text("t"),))}) == 1


def test_element_constructor_children() -> None:
    positional = element("name", None, None, text("Hanus"), text("!"))
    listed = element("name", [], [text("Hanus"), text("!")])
    mixed = element("name", [], [text("Hanus")], text("!"))

    assert positional == listed == mixed
    assert positional.text_content == "Hanus!"


def test_tag_of() -> None:
    assert tag_of(leaf("name", "x")) == "name"
    assert tag_of(text("x")) is None
    assert tags_of([leaf("a", "1"), text("x"), element("b")]) == ["a", None, "b"]


def test_attr() -> None:
    node = element("a", [("x", "1"), ("x", "2"), ("y", "3")])

    assert node.attr("x") == "1"
    assert node.attr("y") == "3"
    assert node.attr("z") is None
    assert node.attr("z", "default") == "default"


def test_text_has_no_children() -> None:
    assert text("x").children == ()
    assert list(text("x").dfs()) == [text("x")]


def test_dfs_bfs_order() -> None:
    b = element("b", [], [leaf("d", "1")])
    c = leaf("c", "2")
    root = element("a", [], [b, c])

    assert [n.tag for n in root.dfs()] == ["a", "b", "d", None, "c", None]
    assert [n.tag for n in root.bfs()] == ["a", "b", "c", "d", None, None]

    assert [n.tag for n in root.dfs(skip_self=True, filter=lambda n: isinstance(n, Element))] == [
        "b",
        "d",
        "c",
    ]
    assert [n.tag for n in root.dfs(prune=lambda n: n.tag == "b")] == ["a", "b", "c", None]
    assert [n.tag for n in root.bfs(prune=lambda n: n.tag == "b", skip_self=True)] == [
        "b",
        "c",
        None,
    ]


def test_dfs_is_lazy() -> None:
    visited: list[XmlNode] = []

    def _filter(n: XmlNode) -> bool:
        visited.append(n)
        return True

    root = element("a", [], [leaf("b", "1"), leaf("c", "2")])
    it = root.dfs(filter=_filter)
    next(it)

    assert visited == [root]


def test_find_elements(contacts: Element) -> None:
    assert [e.text_content for e in contacts.find_elements("email")] == ["mh@x", "hanus@y"]
    assert list(contacts.find_elements("fax")) == []


def test_runtime_type_checks(xcuery_config: ConfigFixtureProtocol) -> None:
    with xcuery_config(runtime_checks=True):
        with pytest.raises(InvalidTypes) as excinfo:
            Element(1, (("x", 2),), ("not a node",))  # type: ignore[arg-type]

        assert [name for name, _, _ in excinfo.value.invalid_fields] == [
            "tag",
            "attrs",
            "children",
        ]

        with pytest.raises(InvalidTypes):
            Text(42)  # type: ignore[arg-type]

        # Valid nodes are fine
        element("a", [("x", "1")], [text("t")])

    with xcuery_config(runtime_checks=False):
        # Not checked
        Text(42)  # type: ignore[arg-type]


def test_rich() -> None:
    console = Console(record=True, width=120, emoji=False)
    console.print(element("entry", [("id", "1")], [leaf("name", "Hanus")]))
    out = console.export_text()

    assert "entry" in out
    assert "@id=1" in out
    assert "name" in out
    assert "'Hanus'" in out
