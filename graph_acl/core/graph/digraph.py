"""Directed graph over dense integer vertex ids."""

from __future__ import annotations

import bisect
from typing import TYPE_CHECKING

from graph_acl.core.exceptions import GraphFormatError, InvalidVertexError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

__all__ = ["Digraph"]


class Digraph:
    """Directed graph stored as an arena of adjacency lists.

    Vertices are the integers ``0..vertex_count - 1``. Each adjacency list is
    kept sorted; parallel edges are allowed. The graph only grows: vertices
    are never removed.

    Example:
        >>> g = Digraph(3)
        >>> _ = g.add_edge(0, 1).add_edge(0, 2)
        >>> g.adj(0)
        [1, 2]
        >>> g.indegree(2)
        1
    """

    __slots__ = ("_adj", "_in_degree", "_edge_count")

    def __init__(self, vertex_count: int = 0) -> None:
        """Pre-allocate ``vertex_count`` vertices with no edges.

        Args:
            vertex_count: Number of vertices to create up front.
        """
        if vertex_count < 0:
            raise ValueError("vertex_count must be non-negative")
        self._adj: list[list[int]] = [[] for _ in range(vertex_count)]
        self._in_degree: list[int] = [0] * vertex_count
        self._edge_count = 0

    @property
    def vertex_count(self) -> int:
        return len(self._adj)

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def __len__(self) -> int:
        return len(self._adj)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(vertices={self.vertex_count}, edges={self.edge_count})"

    def validate_vertex(self, v: int) -> None:
        """Raise ``InvalidVertexError`` when ``v`` is not a vertex of this graph."""
        if not 0 <= v < len(self._adj):
            raise InvalidVertexError(vertex=v, max_vertex=len(self._adj) - 1)

    def has_vertex(self, v: int) -> bool:
        return 0 <= v < len(self._adj)

    def add_vertex(self, v: int) -> int:
        """Grow the graph so that vertex ``v`` exists.

        Args:
            v: Vertex index to ensure.

        Returns:
            The vertex index ``v``.
        """
        if v < 0:
            raise InvalidVertexError(vertex=v, max_vertex=len(self._adj) - 1)
        missing = v + 1 - len(self._adj)
        if missing > 0:
            self._adj.extend([] for _ in range(missing))
            self._in_degree.extend([0] * missing)
        return v

    def add_edge(self, v: int, w: int) -> Digraph:
        """Add the directed edge ``v -> w``.

        Args:
            v: Tail vertex.
            w: Head vertex.

        Returns:
            The graph itself, for chaining.

        Raises:
            InvalidVertexError: If either endpoint is out of range.
        """
        self.validate_vertex(v)
        self.validate_vertex(w)
        bisect.insort(self._adj[v], w)
        self._in_degree[w] += 1
        self._edge_count += 1
        return self

    def has_edge(self, v: int, w: int) -> bool:
        self.validate_vertex(v)
        self.validate_vertex(w)
        adj = self._adj[v]
        i = bisect.bisect_left(adj, w)
        return i < len(adj) and adj[i] == w

    def adj(self, v: int) -> list[int]:
        """Return a copy of the vertices adjacent from ``v``.

        Raises:
            InvalidVertexError: If ``v`` is out of range.
        """
        self.validate_vertex(v)
        return list(self._adj[v])

    def indegree(self, v: int) -> int:
        self.validate_vertex(v)
        return self._in_degree[v]

    def outdegree(self, v: int) -> int:
        self.validate_vertex(v)
        return len(self._adj[v])

    def edges(self) -> Iterator[tuple[int, int]]:
        """Iterate over every ``(v, w)`` edge in vertex order."""
        for v, adj in enumerate(self._adj):
            for w in adj:
                yield v, w

    def reverse(self) -> Digraph:
        """Return a new graph with every edge direction flipped."""
        reversed_graph = Digraph(self.vertex_count)
        for v, w in self.edges():
            reversed_graph.add_edge(w, v)
        return reversed_graph

    def copy(self) -> Digraph:
        clone = Digraph()
        clone._adj = [list(adj) for adj in self._adj]
        clone._in_degree = list(self._in_degree)
        clone._edge_count = self._edge_count
        return clone

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Digraph:
        """Load a graph from its text representation.

        The first non-blank line holds the vertex count, the second the edge
        count, and every following line one ``v w`` edge.

        Args:
            lines: Lines of text, e.g. an open file.

        Returns:
            The parsed graph.

        Raises:
            GraphFormatError: If the input is malformed.
            InvalidVertexError: If an edge references an unknown vertex.
        """
        numbered = [(n, line.strip()) for n, line in enumerate(lines, start=1) if line.strip()]
        if len(numbered) < 2:
            raise GraphFormatError("Expected vertex count and edge count lines")

        vertex_count = _parse_int(numbered[0][1], numbered[0][0])
        edge_count = _parse_int(numbered[1][1], numbered[1][0])
        edge_lines = numbered[2:]
        if len(edge_lines) != edge_count:
            raise GraphFormatError(
                f"Expected {edge_count} edge lines, found {len(edge_lines)}"
            )

        graph = cls(vertex_count)
        for line_number, line in edge_lines:
            parts = line.split()
            if len(parts) != 2:
                raise GraphFormatError("Expected two vertices per edge line", line_number)
            graph.add_edge(_parse_int(parts[0], line_number), _parse_int(parts[1], line_number))
        return graph

    def to_lines(self) -> list[str]:
        """Inverse of ``from_lines``."""
        return [str(self.vertex_count), str(self.edge_count)] + [
            f"{v} {w}" for v, w in self.edges()
        ]


def _parse_int(token: str, line_number: int) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise GraphFormatError(f"Expected an integer, got {token!r}", line_number) from exc
