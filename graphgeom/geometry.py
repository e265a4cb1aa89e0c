from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

import numpy as np
from matplotlib.path import Path

try:
    from . import config
    from .attributes import broadcast, resolve_edge_attribute, resolve_vertex_attribute
    from .edge_paths import ToPixels, end_point, pixel_angle, straight_path, trim_path
    from .graph_model import Edge, Graph, as_positions
    from .label_alignment import Alignment, align_to_dir, compute_auto_label_aligns
    from .markers import clearance, marker_radius
except ImportError:  # Fallback for direct execution
    import config  # type: ignore
    from attributes import broadcast, resolve_edge_attribute, resolve_vertex_attribute  # type: ignore
    from edge_paths import ToPixels, end_point, pixel_angle, straight_path, trim_path  # type: ignore
    from graph_model import Edge, Graph, as_positions  # type: ignore
    from label_alignment import Alignment, align_to_dir, compute_auto_label_aligns  # type: ignore
    from markers import clearance, marker_radius  # type: ignore

logger = logging.getLogger(__name__)


@dataclass
class EdgeGeometry:
    """Drawable geometry of one edge; ``path`` is ``None`` when nothing is drawn."""

    edge: Edge
    path: Optional[Path]
    color: Any
    width: float
    arrow_position: Optional[np.ndarray] = None
    arrow_angle: Optional[float] = None  # radians, in pixel space
    arrow_marker: Any = None
    arrow_size: float = 0.0


@dataclass
class GraphGeometry:
    """Everything the drawing step needs for one render pass."""

    positions: np.ndarray
    node_markers: List[Any]
    node_sizes: List[float]
    node_colors: List[Any]
    label_aligns: List[Alignment]
    label_offsets: np.ndarray  # pixels, one row per node
    node_labels: Optional[List[Any]] = None
    edges: List[EdgeGeometry] = field(default_factory=list)


def _per_vertex(value: Any, graph: Graph, default: Any) -> List[Any]:
    return broadcast(resolve_vertex_attribute(value, graph, default), graph.num_vertices)


def _per_edge(value: Any, graph: Graph, default: Any) -> List[Any]:
    return broadcast(resolve_edge_attribute(value, graph, default), graph.num_edges)


def compute_label_aligns(graph: Graph, points: np.ndarray, align: Any, auto_align: bool) -> List[Alignment]:
    fixed = [tuple(a) for a in _per_vertex(align, graph, config.DEFAULT_LABEL_ALIGN)]
    if not auto_align:
        return fixed
    return compute_auto_label_aligns(graph, points, fallback=fixed)


def compute_graph_geometry(
    graph: Graph,
    positions,
    to_px: ToPixels,
    *,
    edge_paths: Any = None,
    nlabels: Any = None,
    **attributes: Any,
) -> GraphGeometry:
    """Run one geometry pass over ``graph`` laid out at ``positions``.

    ``attributes`` override the plot defaults in :mod:`graphgeom.config`; each
    may be a single value, a dense per-element list or a sparse mapping keyed
    by vertex index or ``(source, target)``. ``edge_paths`` optionally supplies
    externally routed data-space paths per edge; other edges are drawn
    straight. Self-loops are only drawn when a path is supplied for them.

    Edges are trimmed so they start at the source marker outline and stop at
    the arrowhead (or, without arrows, at the destination marker outline).
    All pixel quantities refer to ``to_px`` as it is at call time.
    """
    settings = config.get_plot_defaults(**attributes)
    points = as_positions(positions, graph.num_vertices)

    node_markers = _per_vertex(settings["node_marker"], graph, config.DEFAULT_NODE_MARKER)
    node_sizes = [float(s) for s in _per_vertex(settings["node_size"], graph, config.DEFAULT_NODE_SIZE)]
    node_colors = _per_vertex(settings["node_color"], graph, config.DEFAULT_NODE_COLOR)

    aligns = compute_label_aligns(graph, points, settings["nlabels_align"], settings["nlabels_auto_align"])
    offsets = _per_vertex(settings["nlabels_offset"], graph, config.DEFAULT_LABEL_OFFSET)
    label_offsets = np.array(
        [align_to_dir(align) * float(offset) for align, offset in zip(aligns, offsets)]
    ).reshape(-1, 2)
    labels = None if nlabels is None else _per_vertex(nlabels, graph, None)

    geometry = GraphGeometry(
        positions=points,
        node_markers=node_markers,
        node_sizes=node_sizes,
        node_colors=node_colors,
        label_aligns=aligns,
        label_offsets=label_offsets,
        node_labels=labels,
    )
    if graph.num_edges == 0:
        return geometry

    arrow_show = settings["arrow_show"]
    if arrow_show is None:
        arrow_show = graph.directed
    show_arrows = _per_edge(arrow_show, graph, graph.directed)
    edge_colors = _per_edge(settings["edge_color"], graph, config.DEFAULT_EDGE_COLOR)
    edge_widths = _per_edge(settings["edge_width"], graph, config.DEFAULT_EDGE_WIDTH)
    edge_gaps = _per_edge(settings["edge_gap"], graph, config.DEFAULT_EDGE_GAP)
    arrow_markers = _per_edge(settings["arrow_marker"], graph, config.DEFAULT_ARROW_MARKER)
    arrow_sizes = _per_edge(settings["arrow_size"], graph, config.DEFAULT_ARROW_SIZE)
    routed = _per_edge(edge_paths, graph, None)

    for index, edge in enumerate(graph.edges()):
        source, target = edge
        entry = EdgeGeometry(edge=edge, path=None, color=edge_colors[index], width=float(edge_widths[index]))
        geometry.edges.append(entry)

        path = routed[index]
        if path is None:
            if source == target:
                logger.debug(f"Self-loop {edge} has no routed path, skipped")
                continue
            path = straight_path(points[source], points[target])

        gap = float(edge_gaps[index])
        start_clearance = marker_radius(node_markers[source], node_sizes[source]) + gap
        if show_arrows[index]:
            end_clearance = clearance(
                node_markers[target], node_sizes[target], arrow_markers[index], float(arrow_sizes[index])
            ) + gap
        else:
            end_clearance = marker_radius(node_markers[target], node_sizes[target]) + gap

        trimmed = trim_path(path, start_clearance, end_clearance, to_px)
        if trimmed is None:
            continue
        entry.path = trimmed
        if show_arrows[index]:
            entry.arrow_position = end_point(trimmed)
            entry.arrow_angle = pixel_angle(path, 1.0, to_px)
            entry.arrow_marker = arrow_markers[index]
            entry.arrow_size = float(arrow_sizes[index])

    return geometry
