"""Traversal algorithms over the dependents relation."""

from collections.abc import Callable, Hashable, Iterable, Iterator, Sequence


def reachable[T: Hashable](
    start: Iterable[T],
    successors: Callable[[T], Sequence[T]],
) -> Iterator[T]:
    """Yield every node reachable from ``start``, each exactly once.

    The start nodes themselves are included. Traversal is depth-first and
    shared subgraphs are visited only once.

    Args:
        start: Nodes to begin the walk from. Duplicates are allowed.
        successors: Returns the nodes that depend on a given node.

    Yields:
        Reachable nodes in depth-first discovery order.

    Example:
        >>> edges = {"a": ["b", "c"], "b": ["d"], "c": ["d"], "d": []}
        >>> sorted(reachable(["a"], edges.__getitem__))
        ['a', 'b', 'c', 'd']

    """
    visited: set[T] = set()
    stack = list(start)
    stack.reverse()
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        yield current
        # Reversed so that the first dependent is explored first
        stack.extend(reversed(successors(current)))
