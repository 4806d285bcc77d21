"""Incremental arithmetic expression graphs with memoized evaluation."""

__all__ = [
    "Computable",
    "ForeignNodeError",
    "Graph",
    "GraphStats",
    "Node",
    "NodeKind",
    "NotALeafError",
    "TezaError",
    "add",
    "add_var",
    "get_current_graph",
    "leaf",
    "mul",
    "pow",
    "reset_current_graph",
    "set_current_graph",
    "sin",
    "sub",
    "use_graph",
]

from ._context import get_current_graph, reset_current_graph, set_current_graph, use_graph
from ._errors import ForeignNodeError, NotALeafError, TezaError
from ._expr import add, add_var, leaf, mul, pow, sin, sub  # noqa: A004
from ._graph import Graph, GraphStats, Node, NodeKind
from ._protocol import Computable
