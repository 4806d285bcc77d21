"""Graph module holding the node arena.

This module contains:
- Graph: Arena owning nodes, with memoized evaluation and invalidation
- Node: Handle to a node owned by a Graph
- NodeKind: Enum for node kinds (LEAF, EXPRESSION, EXTERNAL)
- GraphStats: Snapshot of evaluation counters
- reachable: Traversal over the dependents relation
"""

from ._algorithms import reachable
from ._graph import Graph, GraphStats, Operand
from ._node import Node
from ._slot import NodeKind

__all__ = ["Graph", "GraphStats", "Node", "NodeKind", "Operand", "reachable"]
