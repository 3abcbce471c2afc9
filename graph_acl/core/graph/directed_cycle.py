"""Depth-first directed cycle detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graph_acl.core.graph.digraph import Digraph

__all__ = ["DirectedCycle"]


class DirectedCycle:
    """Finds one directed cycle in a ``Digraph``, if any exists.

    A depth-first search is started from every unvisited vertex. The first
    edge ``v -> w`` that reaches a vertex still on the search stack closes a
    cycle; the search stops there.

    The cycle is reported by walking ``edge_to`` links from ``v`` back to
    ``w`` and closing with ``v``, so it reads against edge direction:
    for ``a -> b -> a`` starting at ``a`` the result is ``[b, a, b]``.

    Example:
        >>> g = Digraph(3)
        >>> _ = g.add_edge(0, 1).add_edge(1, 2).add_edge(2, 0)
        >>> DirectedCycle(g).cycle()
        [2, 1, 0, 2]
    """

    def __init__(self, graph: Digraph) -> None:
        n = graph.vertex_count
        self._graph = graph
        self._marked = [False] * n
        self._on_stack = [False] * n
        self._edge_to: list[int | None] = [None] * n
        self._cycle: list[int] | None = None

        for v in range(n):
            if self._cycle is not None:
                break
            if not self._marked[v]:
                self._search(v)

    def _search(self, source: int) -> None:
        # Explicit (vertex, next-neighbour-position) frames replace recursion.
        self._marked[source] = True
        self._on_stack[source] = True
        frames: list[tuple[int, list[int], int]] = [(source, self._graph.adj(source), 0)]

        while frames:
            v, adj, pos = frames[-1]
            if pos == len(adj):
                self._on_stack[v] = False
                frames.pop()
                continue
            frames[-1] = (v, adj, pos + 1)
            w = adj[pos]

            if not self._marked[w]:
                self._edge_to[w] = v
                self._marked[w] = True
                self._on_stack[w] = True
                frames.append((w, self._graph.adj(w), 0))
            elif self._on_stack[w]:
                self._cycle = self._trace(v, w)
                return

    def _trace(self, v: int, w: int) -> list[int]:
        cycle = []
        x: int | None = v
        while x is not None and x != w:
            cycle.append(x)
            x = self._edge_to[x]
        cycle.append(w)
        cycle.append(v)
        return cycle

    def has_cycle(self) -> bool:
        return self._cycle is not None

    def cycle(self) -> list[int] | None:
        """Return a copy of the cycle found, or ``None`` for an acyclic graph."""
        return list(self._cycle) if self._cycle is not None else None
