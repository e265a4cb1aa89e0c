import numpy as np
import pytest

from graphgeom.graph_model import Edge, Graph, as_positions, from_networkx, positions_from_layout


class TestGraph:

    def test_undirected_edges_are_normalized(self, undirected_triangle):
        assert list(undirected_triangle.edges()) == [(0, 1), (1, 2), (0, 2)]
        assert undirected_triangle.has_edge(1, 0)
        assert undirected_triangle.has_edge(0, 1)

    def test_directed_edges_keep_orientation(self):
        graph = Graph.from_edges(2, [(1, 0)], directed=True)
        assert list(graph.edges()) == [Edge(1, 0)]
        assert graph.has_edge(1, 0)
        assert not graph.has_edge(0, 1)

    def test_duplicate_edges_are_ignored(self):
        graph = Graph(2)
        assert graph.add_edge(0, 1)
        assert not graph.add_edge(1, 0)
        assert graph.num_edges == 1

    def test_out_of_range_vertex_raises(self):
        with pytest.raises(ValueError, match="references vertex 3"):
            Graph.from_edges(3, [(0, 3)])

    def test_negative_vertex_count_raises(self):
        with pytest.raises(ValueError):
            Graph(-1)

    def test_neighbors(self):
        graph = Graph.from_edges(3, [(0, 1), (2, 1)], directed=True)
        assert graph.in_neighbors(1) == [0, 2]
        assert graph.out_neighbors(1) == []
        undirected = Graph.from_edges(3, [(0, 1), (2, 1)])
        assert sorted(undirected.out_neighbors(1)) == [0, 2]
        assert sorted(undirected.in_neighbors(1)) == [0, 2]

    def test_to_dict(self):
        graph = Graph.from_edges(2, [(0, 1)], directed=True)
        assert graph.to_dict() == {"directed": True, "num_vertices": 2, "edges": [[0, 1]]}


class TestPositions:

    def test_as_positions_accepts_tuples(self):
        points = as_positions([(0, 0), (1, 2)], 2)
        assert points.dtype == float
        assert points.shape == (2, 2)

    def test_as_positions_rejects_bad_shapes(self):
        with pytest.raises(ValueError, match="entries"):
            as_positions([(0.0, 0.0)], 2)
        with pytest.raises(ValueError, match="shape"):
            as_positions([0.0, 1.0], 2)

    def test_layout_order(self):
        layout = {"b": (1.0, 1.0), "a": (0.0, 0.0)}
        np.testing.assert_allclose(positions_from_layout(layout, ["a", "b"]), [[0, 0], [1, 1]])

    def test_layout_missing_node(self):
        with pytest.raises(ValueError, match="no position"):
            positions_from_layout({"a": (0.0, 0.0)}, ["a", "b"])


def test_from_networkx():
    nx = pytest.importorskip("networkx")
    nx_graph = nx.DiGraph()
    nx_graph.add_edges_from([("x", "y"), ("y", "z")])
    graph, nodes = from_networkx(nx_graph)

    assert nodes == ["x", "y", "z"]
    assert graph.directed
    assert list(graph.edges()) == [(0, 1), (1, 2)]

    layout = {node: (float(i), 0.0) for i, node in enumerate(nodes)}
    assert positions_from_layout(layout, nodes).shape == (3, 2)
