"""Directed graph addressed by string symbols.

Roles and resources are both stored in a ``SymbolGraph``. Edges point from
child to parent, so a forward walk from a symbol enumerates its ancestors.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from graph_acl.core.exceptions import UnknownSymbolError
from graph_acl.core.graph.dfs import DigraphDFS
from graph_acl.core.graph.digraph import Digraph

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

__all__ = ["SymbolGraph", "SymbolGraphData"]

# [(symbol, parents | None), ...]
SymbolGraphData = list[tuple[str, list[str] | None]]


class SymbolGraph:
    """Bijection between symbols and ``Digraph`` vertices.

    Symbols are append-only: once registered a symbol keeps its vertex
    index for the lifetime of the graph.

    Example:
        >>> roles = SymbolGraph()
        >>> _ = roles.add_edge("user", ["guest"]).add_edge("admin", ["user"])
        >>> roles.inherits("admin", "guest")
        True
        >>> roles.ancestors("admin")
        ['user', 'guest']
    """

    __slots__ = ("_graph", "_names", "_indices")

    def __init__(self) -> None:
        self._graph = Digraph()
        self._names: list[str] = []
        self._indices: dict[str, int] = {}

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._indices

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(symbols={self._names!r})"

    @property
    def graph(self) -> Digraph:
        """The underlying index graph."""
        return self._graph

    @property
    def vertex_count(self) -> int:
        return self._graph.vertex_count

    @property
    def edge_count(self) -> int:
        return self._graph.edge_count

    @property
    def symbols(self) -> list[str]:
        return list(self._names)

    def add_vertex(self, symbol: str) -> int:
        """Register ``symbol`` and return its vertex index.

        Registering an existing symbol is a no-op returning its index.
        """
        index = self._indices.get(symbol)
        if index is not None:
            return index
        index = self._graph.add_vertex(len(self._names))
        self._names.append(symbol)
        self._indices[symbol] = index
        return index

    def add_edge(self, symbol: str, parents: Sequence[str] | None = None) -> SymbolGraph:
        """Register ``symbol`` and an edge from it to each parent.

        Missing parents are registered too.

        Args:
            symbol: The child symbol.
            parents: Symbols ``symbol`` inherits from.

        Returns:
            The graph itself, for chaining.
        """
        v = self.add_vertex(symbol)
        for parent in parents or ():
            self._graph.add_edge(v, self.add_vertex(parent))
        return self

    def contains(self, symbol: str) -> bool:
        return symbol in self._indices

    def index(self, symbol: str) -> int | None:
        return self._indices.get(symbol)

    def name(self, index: int) -> str | None:
        if 0 <= index < len(self._names):
            return self._names[index]
        return None

    def names(self, indices: Iterable[int]) -> list[str | None]:
        return [self.name(i) for i in indices]

    def validate_symbol(self, symbol: str) -> int:
        """Return the index of ``symbol``.

        Raises:
            UnknownSymbolError: If ``symbol`` is not registered.
        """
        index = self._indices.get(symbol)
        if index is None:
            raise UnknownSymbolError(symbol)
        return index

    def adj(self, symbol: str) -> list[str] | None:
        """Return the direct parents of ``symbol``, or ``None`` if unknown."""
        index = self._indices.get(symbol)
        if index is None:
            return None
        return [self._names[w] for w in self._graph.adj(index)]

    def inherits(self, symbol: str, ancestor: str) -> bool:
        """Return whether ``ancestor`` is ``symbol`` itself or reachable from it.

        Unknown symbols never inherit and are never inherited from.
        """
        v = self._indices.get(symbol)
        w = self._indices.get(ancestor)
        if v is None or w is None:
            return False
        if v == w:
            return True
        return DigraphDFS(self._graph, v).marked(w)

    def ancestors(self, symbol: str) -> list[str]:
        """Return the strict ancestors of ``symbol``, nearest first.

        The walk is breadth-first over child -> parent edges; parents of the
        same depth keep their adjacency order. Unknown symbols have no
        ancestors.
        """
        source = self._indices.get(symbol)
        if source is None:
            return []

        seen = {source}
        order: list[str] = []
        queue = deque([source])
        while queue:
            v = queue.popleft()
            for w in self._graph.adj(v):
                if w not in seen:
                    seen.add(w)
                    order.append(self._names[w])
                    queue.append(w)
        return order

    def reverse(self) -> SymbolGraph:
        """Return a graph with the same symbols and every edge flipped."""
        reversed_graph = SymbolGraph()
        reversed_graph._names = list(self._names)
        reversed_graph._indices = dict(self._indices)
        reversed_graph._graph = self._graph.reverse()
        return reversed_graph

    def copy(self) -> SymbolGraph:
        clone = SymbolGraph()
        clone._names = list(self._names)
        clone._indices = dict(self._indices)
        clone._graph = self._graph.copy()
        return clone

    def to_data(self) -> SymbolGraphData:
        """Export as ``[(symbol, parents | None), ...]`` in registration order."""
        data: SymbolGraphData = []
        for index, name in enumerate(self._names):
            parents = [self._names[w] for w in self._graph.adj(index)]
            data.append((name, parents or None))
        return data

    @classmethod
    def from_data(cls, data: Iterable[tuple[str, Sequence[str] | None]]) -> SymbolGraph:
        graph = cls()
        for symbol, parents in data:
            graph.add_edge(symbol, parents)
        return graph

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> SymbolGraph:
        """Load from whitespace-separated lines of ``symbol parent...``.

        Blank lines and lines starting with ``#`` are skipped.
        """
        graph = cls()
        for line in lines:
            tokens = line.split()
            if not tokens or tokens[0].startswith("#"):
                continue
            graph.add_edge(tokens[0], tokens[1:])
        return graph
