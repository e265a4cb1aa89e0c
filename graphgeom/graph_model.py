from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple

import numpy as np


class Edge(NamedTuple):
    """Directed ``(source, target)`` pair; equal to the plain tuple ``(source, target)``."""

    source: int
    target: int

    def reversed(self) -> "Edge":
        return Edge(self.target, self.source)


@dataclass
class Graph:
    """Index-based graph topology consumed by the geometry pass.

    Vertices are ``0..num_vertices-1``. Edges keep their insertion order, which
    is the order every per-edge array is aligned with. Undirected edges are
    stored as ``(min, max)``.
    """

    num_vertices: int
    directed: bool = False
    _edges: List[Edge] = field(default_factory=list, init=False, repr=False)
    _out: Dict[int, List[int]] = field(default_factory=dict, init=False, repr=False)
    _in: Dict[int, List[int]] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.num_vertices < 0:
            raise ValueError("num_vertices must be non-negative.")
        self._out = {v: [] for v in range(self.num_vertices)}
        self._in = {v: [] for v in range(self.num_vertices)}

    @classmethod
    def from_edges(
        cls,
        num_vertices: int,
        edges: Iterable[Tuple[int, int]],
        directed: bool = False,
    ) -> "Graph":
        graph = cls(num_vertices, directed=directed)
        for source, target in edges:
            graph.add_edge(source, target)
        return graph

    # ------------------------------------------------------------------ #
    # Mutation (only while building, never during a geometry pass)
    # ------------------------------------------------------------------ #

    def add_edge(self, source: int, target: int) -> bool:
        """Add an edge; returns ``False`` if it already exists."""
        for vertex in (source, target):
            if not 0 <= vertex < self.num_vertices:
                raise ValueError(
                    f"Edge ({source}, {target}) references vertex {vertex}, "
                    f"but the graph has {self.num_vertices} vertices."
                )
        if self.has_edge(source, target):
            return False
        if not self.directed and source > target:
            source, target = target, source
        self._edges.append(Edge(source, target))
        self._out[source].append(target)
        self._in[target].append(source)
        if not self.directed and source != target:
            self._out[target].append(source)
            self._in[source].append(target)
        return True

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    def vertices(self) -> range:
        return range(self.num_vertices)

    def edges(self) -> Iterator[Edge]:
        return iter(self._edges)

    def has_edge(self, source: int, target: int) -> bool:
        return target in self._out.get(source, ())

    def out_neighbors(self, vertex: int) -> List[int]:
        return list(self._out[vertex])

    def in_neighbors(self, vertex: int) -> List[int]:
        return list(self._in[vertex])

    def to_dict(self) -> Dict[str, object]:
        return {
            "directed": self.directed,
            "num_vertices": self.num_vertices,
            "edges": [list(edge) for edge in self._edges],
        }


def from_networkx(nx_graph) -> Tuple[Graph, List[Hashable]]:
    """Convert a networkx graph into a :class:`Graph` plus the node order used.

    Node ``nodes[i]`` of the returned list is vertex ``i``.
    """
    nodes = list(nx_graph.nodes())
    index = {node: idx for idx, node in enumerate(nodes)}
    graph = Graph(len(nodes), directed=nx_graph.is_directed())
    for source, target in nx_graph.edges():
        graph.add_edge(index[source], index[target])
    return graph, nodes


def positions_from_layout(
    layout: Mapping[Hashable, Sequence[float]],
    nodes: Optional[Sequence[Hashable]] = None,
) -> np.ndarray:
    """Turn a ``{node: (x, y)}`` layout (e.g. ``networkx.spring_layout``) into an ``(N, 2)`` array."""
    order = list(layout.keys()) if nodes is None else list(nodes)
    missing = [node for node in order if node not in layout]
    if missing:
        raise ValueError(f"Layout has no position for nodes: {missing}")
    if not order:
        return np.zeros((0, 2), dtype=float)
    return np.asarray([layout[node][:2] for node in order], dtype=float)


def as_positions(positions, num_vertices: int) -> np.ndarray:
    """Validate and convert a per-vertex position sequence into an ``(N, 2)`` float array."""
    array = np.asarray(positions, dtype=float)
    if array.size == 0:
        array = array.reshape(0, 2)
    if array.ndim != 2 or array.shape[1] < 2:
        raise ValueError(f"positions must be an (N, 2) array, got shape {array.shape}.")
    if array.shape[0] < num_vertices:
        raise ValueError(
            f"positions has {array.shape[0]} entries but the graph has {num_vertices} vertices."
        )
    return array[:, :2]
