"""Capability interface for user supplied nodes."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Computable(Protocol):
    """Anything that can take part in a graph as an operand.

    A graph adopts such an object as an external node. It is asked for its
    value on every pull, since the graph cannot know when it changes, and
    ``reset_cache`` is called whenever an invalidation passes through it.

    Objects may additionally define ``add_dependency(node)`` to be told about
    every node that consumes them.
    """

    def compute(self) -> float: ...

    def reset_cache(self) -> None: ...
