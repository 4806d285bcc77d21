"""Storage records of the node arena."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np

    from teza._ops import Operation
    from teza._protocol import Computable


class NodeKind(StrEnum):
    """The kind of node stored in a graph."""

    LEAF = auto()  # Settable input value
    EXPRESSION = auto()  # Memoized operation over other nodes
    EXTERNAL = auto()  # Adopted user object implementing Computable


@dataclass(slots=True)
class Slot:
    """Mutable record of a single node.

    Only the fields relevant to ``kind`` are populated: ``value`` for leaves,
    ``operation`` and ``cache`` for expressions, ``external`` for adopted
    objects. ``dependents`` holds indices of the nodes that use this one as an
    operand, in insertion order and possibly with repeats.
    """

    kind: NodeKind
    value: np.float32 | None = None
    operation: Operation | None = None
    cache: np.float32 | None = None
    external: Computable | None = None
    dependents: list[int] = field(default_factory=list)
