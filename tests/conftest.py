import matplotlib

matplotlib.use("Agg")

import pytest
from matplotlib.transforms import Affine2D

from graphgeom.graph_model import Graph


@pytest.fixture
def directed_chain():
    """A -> B -> C laid out on the x axis."""
    graph = Graph.from_edges(3, [(0, 1), (1, 2)], directed=True)
    positions = [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)]
    return graph, positions


@pytest.fixture
def undirected_triangle():
    return Graph.from_edges(3, [(1, 0), (1, 2), (2, 0)], directed=False)


@pytest.fixture
def hundred_px_per_unit():
    """Data -> pixel transform with 100 pixels per data unit on both axes."""
    return Affine2D().scale(100.0, 100.0)
