"""Exceptions raised by teza."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._graph import NodeKind


class TezaError(Exception):
    """Base class for all teza errors."""


class NotALeafError(TezaError, TypeError):
    """Raised when a leaf-only operation is applied to another kind of node."""

    def __init__(self, index: int, kind: NodeKind) -> None:
        self.index = index
        self.kind = kind
        super().__init__(f"Node #{index} ({kind}) is not a leaf; only leaf nodes can be set")


class ForeignNodeError(TezaError, ValueError):
    """Raised when a node handle is used with a graph that does not own it."""
