from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Mapping
from typing import Any, Iterable, List, Literal, Optional

import numpy as np

try:
    from .graph_model import Edge, Graph
except ImportError:  # Fallback for direct execution
    from graph_model import Edge, Graph  # type: ignore

logger = logging.getLogger(__name__)

ElementKind = Literal["vertex", "edge"]

_MISSING = object()

# Lengths of a 1-D array that may be a single 2-D or 3-D point.
POINT_DIMENSIONS = (2, 3)


def _is_point_array(value: Any) -> bool:
    return isinstance(value, np.ndarray) and value.ndim == 1 and len(value) in POINT_DIMENSIONS


def is_dense_attribute(value: Any, count: Optional[int] = None) -> bool:
    """Return ``True`` if ``value`` holds one entry per element.

    Lists are always dense. A 1-D array of length 2 or 3 is a point, and only
    counts as dense when ``count`` is given and matches its length; pass a
    list for per-element numbers on graphs that small.
    """
    if isinstance(value, list):
        return True
    if _is_point_array(value):
        return count is not None and len(value) == count
    return isinstance(value, np.ndarray)


def is_single_attribute(value: Any, count: Optional[int] = None) -> bool:
    """Return ``True`` if ``value`` applies to every element at once.

    Tuples and point arrays count as single values so that points, RGB(A)
    colors and alignments are never mistaken for per-element arrays.
    """
    return not is_dense_attribute(value, count) and not isinstance(value, Mapping)


def _lookup(mapping: Mapping, key: Any) -> Any:
    # Exact key first, then the container's own default, never inserting the key.
    if key in mapping:
        return mapping[key]
    if isinstance(mapping, defaultdict) and mapping.default_factory is not None:
        return mapping.default_factory()
    return _MISSING


def get_attr(value: Any, index: Any, default: Any = None) -> Any:
    """Return the attribute of a single element.

    Dense arrays are indexed, mappings are looked up at ``index`` (falling back
    to ``default`` when absent) and single values are returned as-is.
    """
    if is_dense_attribute(value):
        return value[index]
    if isinstance(value, Mapping):
        found = _lookup(value, index)
        return default if found is _MISSING else found
    return default if value is None else value


def _is_edge_mapping(value: Any) -> bool:
    return isinstance(value, Mapping) and any(
        isinstance(key, tuple) and len(key) == 2 for key in value.keys()
    )


def edge_keys(graph: Graph, value: Any) -> Iterable[Any]:
    """Enumerate the keys used to resolve a per-edge attribute.

    Mappings keyed by ``(source, target)`` pairs are resolved per edge; on an
    undirected graph each edge is reported in whichever orientation the
    mapping actually uses. Any other attribute, including a mapping keyed by
    edge index, is indexed by edge position.
    """
    if not _is_edge_mapping(value):
        return range(graph.num_edges)
    if graph.directed:
        return list(graph.edges())
    keys: List[Edge] = []
    for edge in graph.edges():
        flipped = edge.reversed()
        if edge not in value and flipped in value:
            keys.append(flipped)
        else:
            keys.append(edge)
    return keys


def _element_keys(graph: Graph, value: Any, kind: ElementKind) -> Iterable[Any]:
    if kind == "vertex":
        return graph.vertices()
    if kind == "edge":
        return edge_keys(graph, value)
    raise ValueError(f"Unknown element kind: {kind}. Expected 'vertex' or 'edge'.")


def _element_count(graph: Graph, kind: ElementKind) -> int:
    if kind == "vertex":
        return graph.num_vertices
    if kind == "edge":
        return graph.num_edges
    raise ValueError(f"Unknown element kind: {kind}. Expected 'vertex' or 'edge'.")


def resolve(value: Any, graph: Graph, kind: ElementKind, default: Any = None) -> Any:
    """Prepare a vertex or edge attribute for the geometry pass.

    A single value is forwarded as is (or ``default`` if ``None``); a dense
    array is forwarded unchanged after a length check; a mapping is expanded
    into a list aligned with the graph's vertex or edge order.
    """
    count = _element_count(graph, kind)
    if is_single_attribute(value, count):
        return default if value is None else value
    if is_dense_attribute(value, count):
        if len(value) != count:
            raise ValueError(
                f"Dense {kind} attribute has {len(value)} entries, expected {count}."
            )
        return value

    resolved = []
    for key in _element_keys(graph, value, kind):
        found = _lookup(value, key)
        if found is _MISSING:
            logger.debug(f"No {kind} attribute for {key!r}, using default {default!r}")
            found = default
        resolved.append(found)
    return resolved


def resolve_vertex_attribute(value: Any, graph: Graph, default: Any = None) -> Any:
    return resolve(value, graph, "vertex", default)


def resolve_edge_attribute(value: Any, graph: Graph, default: Any = None) -> Any:
    return resolve(value, graph, "edge", default)


def broadcast(value: Any, count: int) -> List[Any]:
    """Expand a resolved attribute to exactly ``count`` per-element values."""
    if is_dense_attribute(value, count):
        if len(value) != count:
            raise ValueError(f"Attribute has {len(value)} entries, expected {count}.")
        return list(value)
    return [value] * count
