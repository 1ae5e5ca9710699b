"""Property-based tests for the search primitives.

Properties tested:
- Embedding yields exactly the increasing position tuples whose elements match, in
  lexicographic order, and nothing when there are more patterns than elements
- Permutations are n! distinct bijections
- Partition complements reconstruct the target
- Deep search over a text leaf yields nothing, over a tree visits every element once
- Default selection without candidates builds the default element
"""
from __future__ import annotations

import math
from itertools import combinations

from hypothesis import given
from hypothesis import strategies as st
from xcuery.helpers import select_or_default
from xcuery.match.builder import any_order, node, text, var, xml_any
from xcuery.match.embed import embed, partition
from xcuery.match.permute import permute
from xcuery.match.search import deep_search, search_tree
from xcuery.node import XmlNode, element, tag_of
from xcuery.node import text as txt

tags = st.sampled_from(["a", "b", "c"])
contents = st.text(alphabet="xyz", max_size=3)

leaves = st.builds(lambda t, c: element(t, [], [txt(c)]), tags, contents)
children_lists = st.lists(st.one_of(leaves, st.builds(txt, contents)), max_size=8)

trees = st.recursive(
    st.builds(txt, contents),
    lambda kids: st.builds(lambda t, cs: element(t, [], cs), tags, st.lists(kids, max_size=3)),
    max_leaves=12,
)


def tagged(tag: str):
    return xml_any(tag, None)


@given(children_lists, st.lists(tags, max_size=4))
def test_embed_enumerates_matching_combinations(
    target: list[XmlNode], required: list[str]
) -> None:
    expected = [
        positions
        for positions in combinations(range(len(target)), len(required))
        if all(tag_of(target[p]) == t for p, t in zip(positions, required))
    ]

    got = [e.positions for e in embed([tagged(t) for t in required], target)]

    assert got == expected


@given(children_lists, st.integers(min_value=1, max_value=3))
def test_embed_more_patterns_than_elements(target: list[XmlNode], extra: int) -> None:
    required = [node()] * (len(target) + extra)

    assert list(embed(required, target)) == []


@given(children_lists)
def test_embed_nothing_required(target: list[XmlNode]) -> None:
    solutions = list(embed([], target))

    assert len(solutions) == 1
    assert solutions[0].positions == ()


@given(st.integers(min_value=0, max_value=6))
def test_permutations_are_bijections(n: int) -> None:
    orderings = list(permute(range(n)))

    assert len(orderings) == math.factorial(n)
    assert len(set(orderings)) == len(orderings)
    assert all(sorted(o) == list(range(n)) for o in orderings)


@given(st.lists(st.builds(txt, contents), max_size=4))
def test_any_order_solution_count(target: list[XmlNode]) -> None:
    pattern = any_order(*[node()] * len(target))

    assert len(pattern.findall(target)) == math.factorial(len(target))


@given(children_lists, st.lists(tags, max_size=3))
def test_partition_reconstructs_target(target: list[XmlNode], required: list[str]) -> None:
    for positions, others, _ in partition([tagged(t) for t in required], target):
        assert len(others) + len(required) == len(target)

        rest = iter(others)
        restored = [target[i] if i in positions else next(rest) for i in range(len(target))]

        assert restored == target
        assert next(rest, None) is None


@given(contents, st.one_of(st.none(), tags))
def test_deep_search_text_leaf(content: str, tag: str | None) -> None:
    leaf = txt(content)

    assert list(deep_search(tag, None, None, leaf)) == []
    assert list(deep_search(tag, [], [text(var("v"))], leaf)) == []


@given(trees)
def test_deep_search_finds_every_element(tree: XmlNode) -> None:
    found = [s["el"] for s in search_tree(xml_any(None, None, name="el"), tree)]

    # Pre-order, each element exactly once
    assert found == [n for n in tree.dfs() if tag_of(n) is not None]
    assert len(list(deep_search(None, None, None, tree))) == len(found)


@given(tags, st.lists(st.builds(txt, contents), max_size=3))
def test_select_or_default_without_candidates(tag: str, defaults: list[XmlNode]) -> None:
    assert select_or_default(tag, defaults, []) == element(tag, [], defaults)
