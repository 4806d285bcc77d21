"""Public handle to a node stored in a graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._graph import Graph
    from ._slot import NodeKind


@dataclass(frozen=True, slots=True, repr=False)
class Node:
    """Handle to a node owned by a :class:`Graph`.

    Handles are cheap immutable ``(graph, index)`` pairs; two handles to the
    same node compare equal. Every method forwards to the owning graph.
    """

    graph: Graph
    index: int

    def compute(self) -> float:
        """Return the node's value, recomputing only what was invalidated."""
        return self.graph.compute(self)

    def set(self, value: float) -> None:
        """Overwrite a leaf's value and invalidate everything downstream.

        Raises:
            NotALeafError: If this node is not a leaf.

        """
        self.graph.set(self, value)

    def invalidate(self) -> None:
        """Clear this node's memoized value and everything downstream."""
        self.graph.invalidate(self)

    @property
    def kind(self) -> NodeKind:
        return self.graph.kind(self)

    @property
    def is_leaf(self) -> bool:
        return self.graph.is_leaf(self)

    @property
    def cached(self) -> float | None:
        """The memoized value, or None if the node must be recomputed."""
        return self.graph.cached(self)

    @property
    def operands(self) -> tuple[Node, ...]:
        return self.graph.operands(self)

    @property
    def dependents(self) -> tuple[Node, ...]:
        return self.graph.dependents(self)

    def __repr__(self) -> str:
        return f"Node(#{self.index}, {self.graph.label(self)!r}, cached={self.cached!r})"
