from xcuery.node import Element, element, text


def gen_contacts(entries: int) -> Element:
    """An address book where every third entry has no email and the rest one or two."""

    def _leaf(tag: str, content: str) -> Element:
        return element(tag, [], [text(content)])

    return element(
        "contacts",
        [],
        [
            element(
                "entry",
                [],
                [
                    _leaf("name", f"name_{i}"),
                    _leaf("first", f"first_{i}"),
                    _leaf("phone", f"+49-{i:07}"),
                    *[_leaf("email", f"{i}_{j}@x") for j in range(i % 3)],
                ],
            )
            for i in range(entries)
        ],
    )


def gen_children(size: int, tags: str = "abc") -> tuple[Element, ...]:
    """A flat children list cycling through `tags`."""
    return tuple(element(tags[i % len(tags)], [], [text(str(i))]) for i in range(size))
