"""Single-source reachability over a ``Digraph``."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graph_acl.core.graph.digraph import Digraph

__all__ = ["DigraphDFS"]


class DigraphDFS:
    """Marks every vertex reachable from a source vertex.

    The search is iterative so deep hierarchies never hit the interpreter's
    recursion limit. The source itself is always marked.
    """

    def __init__(self, graph: Digraph, source: int) -> None:
        graph.validate_vertex(source)
        self._graph = graph
        self._marked = [False] * graph.vertex_count
        self._count = 0
        self._search(source)

    def _search(self, source: int) -> None:
        stack = [source]
        while stack:
            v = stack.pop()
            if self._marked[v]:
                continue
            self._marked[v] = True
            self._count += 1
            stack.extend(w for w in self._graph.adj(v) if not self._marked[w])

    def marked(self, v: int) -> bool:
        """Return whether ``v`` is reachable from the source."""
        self._graph.validate_vertex(v)
        return self._marked[v]

    @property
    def count(self) -> int:
        """Number of reachable vertices, the source included."""
        return self._count

    def reachable(self) -> list[int]:
        return [v for v, marked in enumerate(self._marked) if marked]
