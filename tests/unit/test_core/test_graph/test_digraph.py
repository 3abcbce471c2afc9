"""Unit tests for the index-addressed Digraph."""

from __future__ import annotations

import pytest

from graph_acl.core.exceptions import GraphFormatError, InvalidVertexError
from graph_acl.core.graph import Digraph, DigraphDFS


@pytest.mark.unit
class TestDigraph:
    """Test suite for Digraph construction and queries."""

    def test_empty_graph(self):
        graph = Digraph()

        assert graph.vertex_count == 0
        assert graph.edge_count == 0
        assert len(graph) == 0

    def test_preallocated_vertices(self):
        graph = Digraph(4)

        assert graph.vertex_count == 4
        assert all(graph.adj(v) == [] for v in range(4))

    def test_negative_vertex_count_rejected(self):
        with pytest.raises(ValueError):
            Digraph(-1)

    def test_add_vertex_grows_graph(self):
        graph = Digraph()

        assert graph.add_vertex(2) == 2
        assert graph.vertex_count == 3
        assert graph.has_vertex(1)
        assert not graph.has_vertex(3)

    def test_add_vertex_existing_is_noop(self):
        graph = Digraph(5)

        graph.add_vertex(1)

        assert graph.vertex_count == 5

    def test_add_vertex_negative_rejected(self):
        with pytest.raises(InvalidVertexError):
            Digraph().add_vertex(-1)

    def test_add_edge_updates_counts_and_degrees(self):
        graph = Digraph(3).add_edge(0, 1).add_edge(0, 2).add_edge(1, 2)

        assert graph.edge_count == 3
        assert graph.outdegree(0) == 2
        assert graph.indegree(2) == 2
        assert graph.has_edge(0, 2)
        assert not graph.has_edge(2, 0)

    def test_adjacency_is_sorted(self):
        graph = Digraph(4).add_edge(0, 3).add_edge(0, 1).add_edge(0, 2)

        assert graph.adj(0) == [1, 2, 3]

    def test_adj_returns_copy(self):
        graph = Digraph(2).add_edge(0, 1)

        graph.adj(0).append(0)

        assert graph.adj(0) == [1]

    def test_add_edge_out_of_range(self):
        graph = Digraph(2)

        with pytest.raises(InvalidVertexError) as exc_info:
            graph.add_edge(0, 5)

        assert exc_info.value.vertex == 5
        assert exc_info.value.max_vertex == 1
        assert exc_info.value.detail == "Vertex 5 is out of index range 0-1"

    def test_edges_in_vertex_order(self):
        graph = Digraph(3).add_edge(2, 0).add_edge(0, 1)

        assert list(graph.edges()) == [(0, 1), (2, 0)]

    def test_reverse(self):
        graph = Digraph(3).add_edge(0, 1).add_edge(1, 2)

        reversed_graph = graph.reverse()

        assert reversed_graph.has_edge(1, 0)
        assert reversed_graph.has_edge(2, 1)
        assert reversed_graph.edge_count == graph.edge_count
        assert not graph.has_edge(1, 0)

    def test_copy_is_independent(self):
        graph = Digraph(2).add_edge(0, 1)

        clone = graph.copy()
        clone.add_edge(1, 0)

        assert not graph.has_edge(1, 0)
        assert graph.edge_count == 1
        assert clone.edge_count == 2


@pytest.mark.unit
class TestDigraphText:
    """Tests for the vertex-count / edge-count / edge-lines text format."""

    def test_from_lines(self):
        graph = Digraph.from_lines(["3", "2", "0 1", "", "1 2"])

        assert graph.vertex_count == 3
        assert list(graph.edges()) == [(0, 1), (1, 2)]

    def test_to_lines_reads_back(self):
        graph = Digraph(3).add_edge(0, 2).add_edge(1, 2)

        assert Digraph.from_lines(graph.to_lines()).to_lines() == ["3", "2", "0 2", "1 2"]

    def test_missing_header(self):
        with pytest.raises(GraphFormatError):
            Digraph.from_lines(["3"])

    def test_edge_count_mismatch(self):
        with pytest.raises(GraphFormatError, match="Expected 2 edge lines, found 1"):
            Digraph.from_lines(["3", "2", "0 1"])

    def test_non_integer_token_reports_line(self):
        with pytest.raises(GraphFormatError) as exc_info:
            Digraph.from_lines(["2", "1", "0 x"])

        assert exc_info.value.line_number == 3
        assert exc_info.value.detail.startswith("Line 3:")

    def test_edge_line_needs_two_vertices(self):
        with pytest.raises(GraphFormatError):
            Digraph.from_lines(["2", "1", "0 1 1"])

    def test_edge_to_unknown_vertex(self):
        with pytest.raises(InvalidVertexError):
            Digraph.from_lines(["2", "1", "0 7"])


@pytest.mark.unit
class TestDigraphDFS:
    """Tests for single-source reachability."""

    def test_marks_reachable_vertices(self):
        graph = Digraph(5).add_edge(0, 1).add_edge(1, 2).add_edge(3, 4)

        dfs = DigraphDFS(graph, 0)

        assert dfs.marked(0)
        assert dfs.marked(2)
        assert not dfs.marked(3)
        assert dfs.count == 3
        assert dfs.reachable() == [0, 1, 2]

    def test_handles_cycles(self):
        graph = Digraph(2).add_edge(0, 1).add_edge(1, 0)

        assert DigraphDFS(graph, 1).count == 2

    def test_deep_chain_does_not_recurse(self):
        size = 5000
        graph = Digraph(size)
        for v in range(size - 1):
            graph.add_edge(v, v + 1)

        assert DigraphDFS(graph, 0).marked(size - 1)

    def test_invalid_source(self):
        with pytest.raises(InvalidVertexError):
            DigraphDFS(Digraph(1), 3)
