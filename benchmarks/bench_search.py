from __future__ import annotations

import time
import timeit

from sample_tree import gen_contacts
from xcuery.match.builder import deep, deep_any, text, var, with_, with_others, xml


def run_benchmark():
    ENTRIES = 5000

    st = time.monotonic()
    tree = gen_contacts(ENTRIES)
    total_nodes = len(list(tree.dfs()))
    print(f"Time to build tree with {total_nodes} nodes: {time.monotonic() - st:.6f} seconds")

    st = time.monotonic()
    list(tree.dfs())
    full_tree_traversal_time = time.monotonic() - st

    emails = deep("email", [text(var("e"))])
    no_email = deep_any("entry", with_others(xml("name", [text(var("n"))]), without=("email",)))
    any_order = deep_any(
        "entry",
        with_(xml("phone", [text(var("p"))]), xml("name", [text(var("n"))]), any_order=True),
    )

    N = 10

    st = time.monotonic()
    first = [next(emails.match(tree)) for _ in range(N)]
    print(f"Time to find the first email {len(first)} times: {time.monotonic() - st:.6f} seconds")

    for label, matcher in (
        ("every email", emails),
        ("entries without email", no_email),
        ("name and phone in any order", any_order),
    ):
        found = len(matcher.findall(tree))

        # Time the execution of the function 10 times
        mtime = timeit.timeit(lambda: matcher.findall(tree), number=N) / N

        print(f"Time to find {label} ({found} solutions, avg of {N} times): {mtime:.6f} seconds")
        print(f"Slowdown ratio over full tree traversal: {mtime / full_tree_traversal_time:.2f}")


if __name__ == "__main__":
    run_benchmark()
