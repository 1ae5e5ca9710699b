from __future__ import annotations

import math
import timeit

from sample_tree import gen_children
from xcuery.match.builder import any_order, node, with_, xml_any
from xcuery.match.embed import embed, partition
from xcuery.match.permute import permute


def run_benchmark():
    N = 10

    for size, required in ((50, "abc"), (200, "abc"), (50, "abcab")):
        children = gen_children(size)
        patterns = [xml_any(t, None) for t in required]

        total = sum(1 for _ in embed(patterns, children))
        mtime = timeit.timeit(lambda: sum(1 for _ in embed(patterns, children)), number=N) / N
        print(
            f"Embedding {required!r} into {size} children: {total} solutions, "
            f"avg of {N} times: {mtime:.6f} seconds"
        )

        mtime = timeit.timeit(lambda: next(embed(patterns, children)), number=N) / N
        print(f"Time to the first embedding: {mtime:.6f} seconds")

        mtime = timeit.timeit(lambda: sum(1 for _ in partition(patterns, children)), number=N) / N
        print(f"Same with complements: {mtime:.6f} seconds")

    for n in range(4, 9):
        mtime = timeit.timeit(lambda: sum(1 for _ in permute(range(n))), number=N) / N
        print(f"{math.factorial(n)} orderings of {n} items: {mtime:.6f} seconds")

    children = gen_children(6, "abcdef")
    exact = any_order(*[xml_any(t, None) for t in reversed("abcdef")])
    gaps = with_(*[xml_any(t, None) for t in reversed("abc")], any_order=True)
    anything = any_order(*[node()] * 6)

    for label, matcher in (
        ("exact any-order, one ordering fits", exact),
        ("any-order with gaps", gaps),
        ("any-order over wildcards", anything),
    ):
        found = len(matcher.findall(children))
        mtime = timeit.timeit(lambda: matcher.findall(children), number=N) / N
        print(f"{label} ({found} solutions, avg of {N} times): {mtime:.6f} seconds")


if __name__ == "__main__":
    run_benchmark()
