"""Rich rendering utilities for the CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.tree import Tree

from teza._graph import NodeKind

if TYPE_CHECKING:
    from rich.console import Console

    from .example import TreeNode


def format_value(value: float | None, precision: int) -> str:
    """Format a node value rounded to ``precision`` decimals."""
    if value is None:
        return "[dim]not cached[/dim]"
    return str(round(value, precision))


def render_tree(tree_node: TreeNode, console: Console, precision: int) -> None:
    """Render an expression tree using Rich Tree.

    Args:
        tree_node: TreeNode root to render.
        console: Rich Console to output to.
        precision: Decimal digits values are rounded to.

    """
    rich_tree = Tree(_format_node(tree_node, precision, bold=True))
    _add_tree_children(rich_tree, tree_node.children, precision)
    console.print(rich_tree)


def _add_tree_children(parent: Tree, children: list[TreeNode], precision: int) -> None:
    for child in children:
        child_tree = parent.add(_format_node(child, precision))
        _add_tree_children(child_tree, child.children, precision)


def _format_node(tree_node: TreeNode, precision: int, *, bold: bool = False) -> str:
    style = _get_kind_style(tree_node.kind)
    label = escape(tree_node.label)
    if bold:
        label = f"[bold]{label}[/bold]"
    return f"[{style}]{label}[/{style}] = {format_value(tree_node.cached, precision)}"


def _get_kind_style(kind: NodeKind) -> str:
    match kind:
        case NodeKind.LEAF:
            return "blue"
        case NodeKind.EXPRESSION:
            return "green"
        case NodeKind.EXTERNAL:
            return "yellow"
        case _:
            return "white"
