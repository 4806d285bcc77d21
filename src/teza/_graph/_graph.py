"""Node arena with memoized evaluation and invalidation propagation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from teza._errors import ForeignNodeError, NotALeafError
from teza._ops import Add, AddVar, Mul, Operation, Pow, Sin, Sub, apply, operands, symbol, to_float32
from teza._protocol import Computable

from ._algorithms import reachable
from ._node import Node
from ._slot import NodeKind, Slot

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)

type Operand = Node | Computable


@dataclass(frozen=True, slots=True)
class GraphStats:
    """Counters of the work a graph has done since creation or the last reset.

    Attributes:
        recomputations: Expression nodes evaluated because their cache was empty.
        cache_hits: Expression nodes answered from their cache.
        invalidations: Expression or external nodes cleared by propagation.

    """

    recomputations: int = 0
    cache_hits: int = 0
    invalidations: int = 0


class Graph:
    """Arena owning every node of one or more expressions.

    Nodes are addressed by stable indices into the arena. Operand indices are
    the owning relation: the arena keeps every node alive for as long as it
    lives itself. Dependent indices are back-references used only to route
    invalidation from a changed node to everything computed from it.

    Evaluation is pull based: computing a node first computes its
    operands, stopping at any expression whose cache is filled. Setting a leaf
    clears the cache of every node reachable through the dependents relation,
    so a filled cache is never stale.

    The operand graph must be acyclic. This is not checked.

    Example:
        >>> graph = Graph()
        >>> x = graph.leaf(2.0)
        >>> y = graph.mul(x, graph.add_var([x, x]))
        >>> y.compute()
        8.0
        >>> x.set(3.0)
        >>> y.compute()
        18.0

    """

    def __init__(self) -> None:
        self._slots: list[Slot] = []
        # id() of adopted objects; the slot keeps the object alive so ids stay unique
        self._adopted: dict[int, int] = {}
        self._recomputations = 0
        self._cache_hits = 0
        self._invalidations = 0

    # Construction

    def leaf(self, value: float) -> Node:
        """Create a settable leaf holding ``value``."""
        return self._register(Slot(kind=NodeKind.LEAF, value=to_float32(value)))

    def add(self, a: Operand, b: Operand) -> Node:
        """Create a node computing ``a + b``."""
        return self._expression(Add(self._resolve(a), self._resolve(b)))

    def add_var(self, args: Iterable[Operand]) -> Node:
        """Create a node computing the sum of ``args``; an empty sum is 0."""
        return self._expression(AddVar(tuple(self._resolve(arg) for arg in args)))

    def sub(self, a: Operand, b: Operand) -> Node:
        """Create a node computing ``a - b``."""
        return self._expression(Sub(self._resolve(a), self._resolve(b)))

    def mul(self, a: Operand, b: Operand) -> Node:
        """Create a node computing ``a * b``."""
        return self._expression(Mul(self._resolve(a), self._resolve(b)))

    def pow(self, a: Operand, exponent: float) -> Node:
        """Create a node computing ``a ** exponent`` for a constant exponent."""
        return self._expression(Pow(self._resolve(a), float(exponent)))

    def sin(self, a: Operand) -> Node:
        """Create a node computing the sine of ``a`` (radians)."""
        return self._expression(Sin(self._resolve(a)))

    def adopt(self, obj: Computable) -> Node:
        """Wrap a user object as an external node.

        Adopting the same object twice returns the same node.
        """
        index = self._adopted.get(id(obj))
        if index is not None:
            return Node(self, index)
        node = self._register(Slot(kind=NodeKind.EXTERNAL, external=obj))
        self._adopted[id(obj)] = node.index
        logger.debug("Adopted %r as node #%d", obj, node.index)
        return node

    def _expression(self, op: Operation) -> Node:
        node = self._register(Slot(kind=NodeKind.EXPRESSION, operation=op))
        # Once per occurrence: add_var([x, x]) registers the node twice with x
        for operand in operands(op):
            self._add_dependency(operand, node.index)
        return node

    def _register(self, slot: Slot) -> Node:
        self._slots.append(slot)
        index = len(self._slots) - 1
        logger.debug("Created node #%d (%s)", index, slot.kind)
        return Node(self, index)

    def _add_dependency(self, index: int, dependent: int) -> None:
        slot = self._slots[index]
        slot.dependents.append(dependent)
        if slot.kind is NodeKind.EXTERNAL:
            add_dependency = getattr(slot.external, "add_dependency", None)
            if add_dependency is not None:
                add_dependency(Node(self, dependent))

    def _resolve(self, operand: Operand) -> int:
        if isinstance(operand, Node):
            return self._index(operand)
        if isinstance(operand, Computable):
            return self.adopt(operand).index
        msg = f"Operand must be a Node or a Computable object, got {type(operand).__name__}"
        raise TypeError(msg)

    def _index(self, node: Node) -> int:
        if node.graph is not self:
            msg = f"Node #{node.index} belongs to a different graph"
            raise ForeignNodeError(msg)
        return node.index

    # Evaluation

    def compute(self, node: Node) -> float:
        """Return the value of ``node``.

        Filled caches are trusted without any freshness check; operands are
        only visited below nodes whose cache was cleared.
        """
        return float(self._compute(self._index(node)))

    def _compute(self, index: int) -> np.float32:
        """Evaluate ``index`` with an explicit post-order stack.

        Each frame is ``(index, expanded)``. An uncached expression is pushed
        back as expanded beneath its operands, which are pushed in reverse so
        they are evaluated left to right. Results accumulate on ``values``;
        an expanded frame pops exactly as many values as it has operands.
        """
        stack: list[tuple[int, bool]] = [(index, False)]
        values: list[np.float32] = []
        while stack:
            current, expanded = stack.pop()
            slot = self._slots[current]
            if expanded:
                op = slot.operation
                count = len(operands(op))  # type: ignore[arg-type]
                args = values[len(values) - count :]
                del values[len(values) - count :]
                result = apply(op, args)  # type: ignore[arg-type]
                slot.cache = result
                self._recomputations += 1
                logger.debug("Computed node #%d (%s) = %r", current, symbol(op), float(result))  # type: ignore[arg-type]
                values.append(result)
                continue
            match slot.kind:
                case NodeKind.LEAF:
                    values.append(slot.value)  # type: ignore[arg-type]
                case NodeKind.EXTERNAL:
                    values.append(to_float32(slot.external.compute()))  # type: ignore[union-attr]
                case NodeKind.EXPRESSION:
                    if slot.cache is not None:
                        self._cache_hits += 1
                        values.append(slot.cache)
                        continue
                    stack.append((current, True))
                    stack.extend((operand, False) for operand in reversed(operands(slot.operation)))  # type: ignore[arg-type]
                case _:
                    msg = f"Unknown node kind: {slot.kind}"
                    raise TypeError(msg)
        return values[-1]

    # Invalidation

    def set(self, node: Node, value: float) -> None:
        """Overwrite a leaf's value and clear every cache computed from it.

        Propagation happens even when ``value`` equals the current value.

        Raises:
            NotALeafError: If ``node`` is not a leaf. The graph is left untouched.

        """
        index = self._index(node)
        slot = self._slots[index]
        if slot.kind is not NodeKind.LEAF:
            raise NotALeafError(index, slot.kind)
        slot.value = to_float32(value)
        logger.debug("Set leaf #%d = %r", index, float(slot.value))
        self._propagate(slot.dependents)

    def invalidate(self, node: Node) -> None:
        """Clear ``node``'s memoized value and every cache computed from it.

        Useful after an external node changed behind the graph's back.
        """
        self._propagate([self._index(node)])

    def _propagate(self, start: list[int]) -> None:
        cleared = 0
        for index in reachable(start, self._dependents_of):
            slot = self._slots[index]
            match slot.kind:
                case NodeKind.EXPRESSION:
                    slot.cache = None
                case NodeKind.EXTERNAL:
                    slot.external.reset_cache()  # type: ignore[union-attr]
                case _:
                    continue
            cleared += 1
        self._invalidations += cleared
        logger.debug("Invalidated %d node(s) downstream of %s", cleared, start)

    def _dependents_of(self, index: int) -> list[int]:
        return self._slots[index].dependents

    # Inspection

    def kind(self, node: Node) -> NodeKind:
        return self._slots[self._index(node)].kind

    def is_leaf(self, node: Node) -> bool:
        return self.kind(node) is NodeKind.LEAF

    def cached(self, node: Node) -> float | None:
        """Return the memoized value of ``node`` without computing anything.

        Leaves always report their value; external nodes report None since
        the graph never memoizes them.
        """
        slot = self._slots[self._index(node)]
        match slot.kind:
            case NodeKind.LEAF:
                return float(slot.value)  # type: ignore[arg-type]
            case NodeKind.EXPRESSION:
                return None if slot.cache is None else float(slot.cache)
            case _:
                return None

    def operands(self, node: Node) -> tuple[Node, ...]:
        """Return the operands of ``node`` in declared order, with repeats."""
        op = self._slots[self._index(node)].operation
        if op is None:
            return ()
        return tuple(Node(self, index) for index in operands(op))

    def dependents(self, node: Node) -> tuple[Node, ...]:
        """Return the nodes consuming ``node`` in registration order, with repeats."""
        return tuple(Node(self, index) for index in self._slots[self._index(node)].dependents)

    def descendants(self, node: Node) -> frozenset[Node]:
        """Return every node whose value is computed, directly or not, from ``node``."""
        index = self._index(node)
        return frozenset(
            Node(self, other) for other in reachable(self._slots[index].dependents, self._dependents_of)
        )

    def label(self, node: Node) -> str:
        """Return a short description such as ``"leaf"``, ``"sin"`` or ``"** 3"``."""
        slot = self._slots[self._index(node)]
        if slot.operation is not None:
            return symbol(slot.operation)
        if slot.kind is NodeKind.EXTERNAL:
            return type(slot.external).__name__
        return str(slot.kind)

    def nodes(self) -> Iterator[Node]:
        """Iterate over all nodes in creation order."""
        return (Node(self, index) for index in range(len(self._slots)))

    @property
    def stats(self) -> GraphStats:
        """Snapshot of the evaluation and invalidation counters."""
        return GraphStats(
            recomputations=self._recomputations,
            cache_hits=self._cache_hits,
            invalidations=self._invalidations,
        )

    def reset_stats(self) -> None:
        self._recomputations = 0
        self._cache_hits = 0
        self._invalidations = 0

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._slots)

    def __contains__(self, node: object) -> bool:
        """Check if ``node`` is a handle owned by this graph."""
        return isinstance(node, Node) and node.graph is self and 0 <= node.index < len(self._slots)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._slots)})"
