"""Shared Leaf Example for teza.

This example builds an expression that reuses one leaf in several places:

    x1 + sum(x1, x1, x1 - x1 * sin(x1) ** 3)

and shows how much work each re-evaluation takes after the leaf changes.
Run it with:
    python examples/shared_leaf.py
"""

import teza as tz

# -----------------------------------------------------------------------------
# Graph Setup
# -----------------------------------------------------------------------------

graph = tz.Graph()
x1 = graph.leaf(2.0)
output = graph.add(
    x1,
    graph.add_var([x1, x1, graph.sub(x1, graph.mul(x1, graph.pow(graph.sin(x1), 3.0)))]),
)


def report(label: str) -> None:
    graph.reset_stats()
    value = output.compute()
    stats = graph.stats
    print(f"{label}: output = {round(value, 5)} ({stats.recomputations} recomputed, {stats.cache_hits} reused)")


if __name__ == "__main__":
    report("x1 = 2")
    report("again")
    x1.set(3.0)
    report("x1 = 3")
