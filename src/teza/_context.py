"""Context variable holding the current graph.

Nodes built without any operand (``leaf`` and an empty ``add_var``) are
created in the current graph. Every other constructor uses the graph that
owns its operands.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

from ._graph import Graph

if TYPE_CHECKING:
    from collections.abc import Iterator

# Process wide fallback used while no graph has been set in context. It is
# never cleared: nodes built here live until the interpreter exits.
_default_graph = Graph()

_current_graph_var: ContextVar[Graph | None] = ContextVar("current_graph", default=None)


def get_current_graph() -> Graph:
    """Get the current graph from context, falling back to the default graph."""
    graph = _current_graph_var.get()
    return _default_graph if graph is None else graph


def set_current_graph(graph: Graph | None) -> Token[Graph | None]:
    """Set the current graph in context.

    Returns a token that can be used to reset the value.
    """
    return _current_graph_var.set(graph)


def reset_current_graph(token: Token[Graph | None]) -> None:
    """Reset the current graph using a token from set_current_graph."""
    _current_graph_var.reset(token)


@contextmanager
def use_graph(graph: Graph) -> Iterator[Graph]:
    """Make ``graph`` the current graph for the duration of the block.

    Nodes built outside any such block go to the process wide default graph,
    which is never cleared. Scope short lived expressions with
    ``use_graph(Graph())`` so they are released along with their graph.

    Example:
        >>> with use_graph(Graph()) as graph:
        ...     x = leaf(1.0)
        >>> x in graph
        True

    """
    token = set_current_graph(graph)
    try:
        yield graph
    finally:
        reset_current_graph(token)
