"""Example expression used by the CLI commands.

This module provides pure functions for building, updating and describing
the example graph ``x1 + x2 * sin(x2 + x3 ** 3)``. These are the functional
core - no I/O, no Rich rendering.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from teza._graph import Graph, Node, NodeKind

LEAF_NAMES = ("x1", "x2", "x3")


class AssignmentError(ValueError):
    """Raised when a NAME=VALUE update cannot be parsed or names no leaf."""


@dataclass(frozen=True, slots=True)
class ExampleGraph:
    """The example expression together with its named leaves."""

    graph: Graph
    leaves: dict[str, Node]
    output: Node

    def name_of(self, node: Node) -> str | None:
        for name, candidate in self.leaves.items():
            if candidate == node:
                return name
        return None


@dataclass(frozen=True, slots=True)
class UpdateOutcome:
    """Result of re-evaluating the example after a batch of leaf updates."""

    value: float
    recomputed: int
    reused: int


@dataclass(slots=True)
class TreeNode:
    """A node of the expression tree for rendering."""

    label: str
    kind: NodeKind
    cached: float | None
    children: list[TreeNode]


def build_example_graph(inputs: Mapping[str, float]) -> ExampleGraph:
    """Build ``x1 + x2 * sin(x2 + x3 ** 3)`` in a fresh graph.

    Args:
        inputs: Starting value of every name in ``LEAF_NAMES``.

    Returns:
        The example graph, not yet evaluated.

    """
    graph = Graph()
    x1, x2, x3 = (graph.leaf(inputs[name]) for name in LEAF_NAMES)
    output = graph.add(x1, graph.mul(x2, graph.sin(graph.add(x2, graph.pow(x3, 3.0)))))
    return ExampleGraph(graph=graph, leaves={"x1": x1, "x2": x2, "x3": x3}, output=output)


def parse_assignment(text: str) -> tuple[str, float]:
    """Parse a ``NAME=VALUE`` pair such as ``x1=2.5``.

    Raises:
        AssignmentError: If the text is malformed or names no known leaf.

    """
    name, sep, raw_value = text.partition("=")
    name = name.strip()
    if not sep or not name:
        msg = f"Expected NAME=VALUE, got '{text}'"
        raise AssignmentError(msg)
    if name not in LEAF_NAMES:
        msg = f"Unknown leaf '{name}' (expected one of {', '.join(LEAF_NAMES)})"
        raise AssignmentError(msg)
    try:
        value = float(raw_value)
    except ValueError as e:
        msg = f"Invalid value for '{name}': '{raw_value.strip()}'"
        raise AssignmentError(msg) from e
    return name, value


def apply_updates(example: ExampleGraph, updates: list[tuple[str, float]]) -> UpdateOutcome:
    """Set the given leaves in order, then re-evaluate the output.

    Returns:
        The new output together with how many expression nodes had to be
        recomputed and how many cached values were reused.

    """
    for name, value in updates:
        example.leaves[name].set(value)

    before = example.graph.stats
    value = example.output.compute()
    after = example.graph.stats
    return UpdateOutcome(
        value=value,
        recomputed=after.recomputations - before.recomputations,
        reused=after.cache_hits - before.cache_hits,
    )


def get_expression_tree(example: ExampleGraph, node: Node | None = None) -> TreeNode:
    """Build the operand tree below ``node`` (the output by default).

    Shared nodes appear once under every parent that uses them.
    """
    if node is None:
        node = example.output
    name = example.name_of(node)
    label = name if name is not None else example.graph.label(node)
    return TreeNode(
        label=label,
        kind=node.kind,
        cached=node.cached,
        children=[get_expression_tree(example, operand) for operand in node.operands],
    )
