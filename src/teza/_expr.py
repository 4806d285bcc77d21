"""Module level node constructors.

These mirror the constructors of :class:`Graph` but pick the graph
themselves: the one owning the first operand node, or the current graph
when no operand is a node.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._context import get_current_graph
from ._graph import Graph, Node

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._graph import Operand


def _owner(*operands: Operand) -> Graph:
    for operand in operands:
        if isinstance(operand, Node):
            return operand.graph
    return get_current_graph()


def leaf(value: float) -> Node:
    """Create a settable leaf in the current graph.

    Outside ``use_graph`` the leaf, and everything built from it, is kept in
    the process wide default graph for the rest of the process. Build
    throwaway expressions inside ``use_graph(Graph())`` or on an explicit
    ``Graph`` instead.

    Example:
        >>> x = leaf(2.0)
        >>> x.compute()
        2.0

    """
    return get_current_graph().leaf(value)


def add(a: Operand, b: Operand) -> Node:
    return _owner(a, b).add(a, b)


def add_var(args: Iterable[Operand]) -> Node:
    """Create a node summing any number of operands.

    The sum is folded left to right starting from 0, so ``add_var([])``
    evaluates to 0.0 and ``add_var([a])`` to the value of ``a``.
    """
    args = list(args)
    return _owner(*args).add_var(args)


def sub(a: Operand, b: Operand) -> Node:
    return _owner(a, b).sub(a, b)


def mul(a: Operand, b: Operand) -> Node:
    return _owner(a, b).mul(a, b)


def pow(a: Operand, exponent: float) -> Node:  # noqa: A001
    """Create a node raising ``a`` to a constant ``exponent``.

    Standard floating point rules apply: a negative base with a fractional
    exponent gives NaN and ``0 ** 0`` gives 1.
    """
    return _owner(a).pow(a, exponent)


def sin(a: Operand) -> Node:
    return _owner(a).sin(a)
